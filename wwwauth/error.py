"""
Exceptions raised while parsing, serialising and validating challenges.

They're all ValueErrors, so that callers which treat any bad value the same way
can keep doing so.
"""

from typing import Optional


class ChallengeError(ValueError):
    "Base class for challenge errors."


class ChallengeSyntaxError(ChallengeError):
    """
    A field value doesn't conform to the challenge grammar.

    char is None when the problem is the end of input.
    """

    def __init__(
        self, position: int, char: Optional[str], field_index: Optional[int] = None
    ) -> None:
        self.position = position
        self.char = char
        self.field_index = field_index
        if char is None:
            message = f"unexpected end of input at position {position}"
        else:
            message = f"unexpected octet {ord(char):#x} at position {position}"
        if field_index is not None:
            message = f"field value {field_index}: {message}"
        ChallengeError.__init__(self, message)


class InvalidCharacterError(ChallengeError):
    "A value can't be represented as a quoted-string."

    def __init__(self, position: int, char: str) -> None:
        self.position = position
        self.char = char
        ChallengeError.__init__(
            self,
            f"value contains ASCII control character (decimal {ord(char)}) "
            f"at position {position}",
        )


class InvalidInputError(ChallengeError):
    "Challenges or a default realm that can't be serialised."


class ChallengeStructureError(InvalidInputError):
    """
    A challenge breaks a structural rule; the indices say where.
    """

    def __init__(
        self,
        reason: str,
        challenge_index: Optional[int] = None,
        param_index: Optional[int] = None,
    ) -> None:
        self.reason = reason
        self.challenge_index = challenge_index
        self.param_index = param_index
        location = self.location()
        InvalidInputError.__init__(
            self, f"{location}: {reason}" if location else reason
        )

    def location(self) -> str:
        if self.challenge_index is None:
            return ""
        out = f"challenges[{self.challenge_index}]"
        if self.param_index is not None:
            out += f".params[{self.param_index}]"
        return out
