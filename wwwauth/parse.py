"""
Parse challenge lists (RFC7235, Section 4.1) into Challenges.

ChallengeParser is a position-passing recursive descent parser. Each
production takes the position to start at and returns either None or a
(result, end position) tuple. The input never changes and there is no shared
cursor, so trying one alternative and then another from the same position
needs no clean-up.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from wwwauth.challenge import Challenge, Param
from wwwauth.error import ChallengeSyntaxError
from wwwauth.octets import is_control_char, is_token_char, is_token68_char
from wwwauth.speak import Note, categories, levels
from wwwauth.type import AddNoteMethodType

log = logging.getLogger(__name__)

OWS_CHARS = " \t"

StrResultType = Optional[Tuple[str, int]]


class ChallengeParser:
    """
    Parser for a single field value.

    Productions that fail record how far they got, so that a syntax error can
    point at the octet that actually stopped the parse.
    """

    def __init__(self, value: str, add_note: AddNoteMethodType = None) -> None:
        self.value = value
        self.end = len(value)
        self.add_note = add_note
        self.furthest = 0

    def char(self, pos: int) -> Optional[str]:
        "The character at pos, or None at the end of input."
        if pos < self.end:
            return self.value[pos]
        return None

    def fail(self, pos: int) -> None:
        self.furthest = max(self.furthest, pos)

    def syntax_error(self, pos: int) -> ChallengeSyntaxError:
        pos = max(pos, self.furthest)
        return ChallengeSyntaxError(pos, self.char(pos))

    def parse(self, challenges: Sequence[Challenge] = ()) -> List[Challenge]:
        """
        challenge-list: 1#challenge, tolerating leading commas and empty list
        elements. Returns challenges with the new ones appended.
        """
        out = list(challenges)
        pos = self.ows(0)
        while self.char(pos) == ",":
            pos = self.ows(pos + 1)
        result = self.challenge(pos)
        if result is None:
            raise self.syntax_error(pos)
        challenge, trailing_comma, pos = result
        out.append(challenge)
        while True:
            if not trailing_comma:
                after_ows = self.ows(pos)
                if self.char(after_ows) != ",":
                    break
                pos = after_ows + 1
            start = self.ows(pos)
            result = self.challenge(start)
            if result is None:
                pos = start
                trailing_comma = False
                continue
            challenge, trailing_comma, pos = result
            out.append(challenge)
        pos = self.ows(pos)
        if pos != self.end:
            raise self.syntax_error(pos)
        return out

    def challenge(self, pos: int) -> Optional[Tuple[Challenge, bool, int]]:
        """
        challenge = auth-scheme [ 1*SP ( token68 / [ ( "," / auth-param )
                                         *( OWS "," [ OWS auth-param ] ) ] ) ]

        The boolean returned is True when the challenge ends having consumed a
        comma, in which case the next challenge can start straight away.
        """
        scheme_result = self.token(pos)
        if scheme_result is None:
            return None
        scheme, pos = scheme_result
        if self.char(pos) != " ":
            return Challenge(scheme), False, pos
        while self.char(pos) == " ":
            pos += 1
        if self.char(pos) is None:
            return Challenge(scheme), False, pos

        params: List[Param] = []
        if self.char(pos) != ",":
            param_result = self.auth_param(pos)
            if param_result is None:
                # auth-param needs a "=" that token68 may not have; try that
                token68_result = self.token68(pos)
                if token68_result is None:
                    return None
                token68, pos = token68_result
                return Challenge(scheme, token68=token68), False, pos
            param, pos = param_result
            params.append(param)

        trailing_comma = False
        while True:
            after_ows = self.ows(pos)
            if self.char(after_ows) != ",":
                break
            pos = self.ows(after_ows + 1)
            trailing_comma = True
            param_result = self.auth_param(pos)
            if param_result is not None:
                param, pos = param_result
                params.append(param)
                trailing_comma = False
                continue
            if self.char(pos) in (",", None):  # empty list element
                continue
            if self.starts_challenge(pos):
                break
            skipped_to = self.skip_element(pos)
            if skipped_to is None:
                break
            self.param_skipped(scheme, pos, skipped_to)
            pos = skipped_to
        return Challenge(scheme, params), trailing_comma, pos

    def auth_param(self, pos: int) -> Optional[Tuple[Param, int]]:
        'auth-param = token BWS "=" BWS ( token / quoted-string )'
        attribute_result = self.token(pos)
        if attribute_result is None:
            return None
        attribute, pos = attribute_result
        pos = self.ows(pos)
        if self.char(pos) != "=":
            self.fail(pos)
            return None
        pos = self.ows(pos + 1)
        value_result = self.quoted_string(pos) or self.token(pos)
        if value_result is None:
            return None
        value, pos = value_result
        return Param(attribute, value), pos

    def token(self, pos: int) -> StrResultType:
        start = pos
        while pos < self.end and is_token_char(self.value[pos]):
            pos += 1
        if pos == start:
            self.fail(pos)
            return None
        return self.value[start:pos], pos

    def token68(self, pos: int) -> StrResultType:
        start = pos
        while pos < self.end and is_token68_char(self.value[pos]):
            pos += 1
        if pos == start:
            self.fail(pos)
            return None
        while self.char(pos) == "=":
            pos += 1
        return self.value[start:pos], pos

    def quoted_string(self, pos: int) -> StrResultType:
        """
        quoted-string = DQUOTE *( qdtext / quoted-pair ) DQUOTE

        Returns the unescaped content.
        """
        if self.char(pos) != '"':
            self.fail(pos)
            return None
        pos += 1
        out = []
        while True:
            char = self.char(pos)
            if char == '"':
                return "".join(out), pos + 1
            if char == "\\":
                pos += 1
                char = self.char(pos)
            if char is None or is_control_char(char):
                self.fail(pos)
                return None
            out.append(char)
            pos += 1

    def ows(self, pos: int) -> int:
        while pos < self.end and self.value[pos] in OWS_CHARS:
            pos += 1
        return pos

    def starts_challenge(self, pos: int) -> bool:
        "Does a new challenge, rather than a malformed auth-param, start at pos?"
        scheme_result = self.token(pos)
        if scheme_result is None:
            return False
        end = scheme_result[1]
        return self.char(end) in (" ", None) or self.char(self.ows(end)) == ","

    def skip_element(self, pos: int) -> Optional[int]:
        """
        Return the position of the comma (or the end of input) that ends the
        list element at pos. Returns None if the element holds something that
        can't be skipped safely: a control character or an unterminated
        quoted-string.
        """
        while True:
            char = self.char(pos)
            if char is None or char == ",":
                return pos
            if is_control_char(char):
                return None
            if char == '"':
                quoted_result = self.quoted_string(pos)
                if quoted_result is None:
                    return None
                pos = quoted_result[1]
            else:
                pos += 1

    def param_skipped(self, scheme: str, start: int, end: int) -> None:
        element = self.value[start:end].rstrip(OWS_CHARS)
        log.debug(
            "skipped malformed auth-param %r in %s challenge at position %d",
            element,
            scheme,
            start,
        )
        if self.add_note:
            self.add_note(
                CHALLENGE_PARAM_SKIPPED, scheme=scheme, element=element, position=start
            )


def parse_challenges(
    value: str,
    challenges: Sequence[Challenge] = None,
    add_note: AddNoteMethodType = None,
) -> List[Challenge]:
    """
    Parse a WWW-Authenticate or Proxy-Authenticate field value and return the
    challenges it holds, appended to a copy of challenges (if given).

    Raises ChallengeSyntaxError if the whole value isn't a challenge list;
    nothing is returned in that case. Malformed parameters that can be
    skipped are reported through add_note, if it's given.
    """
    return ChallengeParser(value, add_note).parse(challenges or ())


def parse_challenge_headers(
    values: Iterable[str], add_note: AddNoteMethodType = None
) -> List[Challenge]:
    """
    Parse several field values (e.g., one per header line), in order. A syntax
    error carries the index of the value it was found in.
    """
    challenges: List[Challenge] = []
    for index, value in enumerate(values):
        try:
            challenges = parse_challenges(value, challenges, add_note)
        except ChallengeSyntaxError as why:
            raise ChallengeSyntaxError(why.position, why.char, index) from why
    return challenges


def unquote_string(value: str) -> str:
    "Decode a complete quoted-string."
    parser = ChallengeParser(value)
    result = parser.quoted_string(0)
    if result is None:
        raise parser.syntax_error(0)
    if result[1] != len(value):
        raise parser.syntax_error(result[1])
    return result[0]


class CHALLENGE_PARAM_SKIPPED(Note):
    category = categories.AUTH
    level = levels.WARN
    summary = "A malformed parameter in the %(scheme)s challenge was ignored."
    text = """\
The `%(scheme)s` challenge contains a list element that isn't a valid `auth-param` (a
`name=value` pair), starting at position %(position)s:

    %(element)s

Recipients can't know what was meant, so it has been skipped. The challenge's other parameters
are still used."""
