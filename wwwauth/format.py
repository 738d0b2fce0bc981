"""
Serialise Challenges into a single WWW-Authenticate (or Proxy-Authenticate)
field value.

There's one canonical form: challenges and params are separated by a bare
comma, registered schemes use their registered spelling, and every param
value is a quoted-string.
"""

from typing import Sequence, Tuple

from wwwauth.challenge import Challenge, Param, canonical_scheme
from wwwauth.error import (
    ChallengeStructureError,
    InvalidCharacterError,
    InvalidInputError,
)
from wwwauth.octets import is_token, is_token68
from wwwauth.quoting import quote_string, validate_quotable


def format_challenges(challenges: Sequence[Challenge], default_realm: str = "") -> str:
    """
    Return the field value for challenges.

    A challenge with params but without a realm gets realm="default_realm"
    as its first param, even when default_realm is empty.

    Raises InvalidInputError (ChallengeStructureError when a particular
    challenge or param is to blame) if the result wouldn't be valid.
    """
    try:
        validate_quotable(default_realm)
    except InvalidCharacterError as why:
        raise InvalidInputError(f"default realm is invalid: {why}") from why
    if not challenges:
        raise InvalidInputError("challenges must not be empty")
    return ",".join(
        format_challenge(challenge, default_realm, index)
        for index, challenge in enumerate(challenges)
    )


def format_challenge(challenge: Challenge, default_realm: str, index: int = 0) -> str:
    "Serialise a single challenge; index is used in error messages."
    if not isinstance(challenge, Challenge):
        raise ChallengeStructureError(f"{challenge!r} isn't a Challenge", index)
    if not is_token(challenge.scheme):
        raise ChallengeStructureError(
            f"scheme {challenge.scheme!r} isn't a valid token", index
        )
    scheme = canonical_scheme(challenge.scheme)
    if challenge.token68:
        if challenge.params:
            raise ChallengeStructureError(
                "must not have both a token68 and params", index
            )
        if not is_token68(challenge.token68):
            raise ChallengeStructureError(
                f"token68 {challenge.token68!r} isn't a valid token68", index
            )
        return f"{scheme} {challenge.token68}"
    if not challenge.params:
        raise ChallengeStructureError("must have either a token68 or params", index)

    params = []
    if challenge.realm is None:
        params.append(f"realm={quote_string(default_realm)}")
    for param_index, param in enumerate(challenge.params):
        params.append(format_param(param, index, param_index))
    return f"{scheme} {','.join(params)}"


def format_param(param: Param, index: int, param_index: int) -> str:
    if not isinstance(param, Param):
        raise ChallengeStructureError(f"{param!r} isn't a Param", index, param_index)
    if not is_token(param.attribute):
        raise ChallengeStructureError(
            f"attribute {param.attribute!r} isn't a valid token", index, param_index
        )
    try:
        return f"{param.attribute}={quote_string(param.value)}"
    except InvalidCharacterError as why:
        raise ChallengeStructureError(
            f"value {param.value!r} is invalid: {why}", index, param_index
        ) from why


class WWWAuthenticateError(Exception):
    """
    An error that is reported to the client as a 401 response carrying
    challenges.

    The challenges are checked and serialised when the error is created, so
    header_value is always available afterwards. Don't change the
    challenges after handing them over.
    """

    def __init__(
        self, message: str, challenges: Sequence[Challenge], default_realm: str = ""
    ) -> None:
        Exception.__init__(self, message)
        self.message = message
        self.challenges: Tuple[Challenge, ...] = tuple(challenges)
        self._header_value = format_challenges(self.challenges, default_realm)

    @property
    def header_value(self) -> str:
        "The serialised WWW-Authenticate field value."
        return self._header_value
