"""
The Bearer authentication scheme (RFC6750).

validate_bearer_challenges() checks the rules that RFC6750 adds on top of the
generic challenge grammar; BearerAuthorizer uses them to answer requests for a
single realm.
"""

from collections import defaultdict
import logging
import re
from typing import Callable, Dict, Generic, Optional, Sequence, TypeVar

from wwwauth.challenge import AUTHORIZATION, WWW_AUTHENTICATE, Challenge, Param
from wwwauth.error import (
    ChallengeError,
    ChallengeStructureError,
    InvalidCharacterError,
    InvalidInputError,
)
from wwwauth.format import WWWAuthenticateError, format_challenges
from wwwauth.quoting import validate_quotable
from wwwauth.syntax import rfc6750
from wwwauth.type import HttpResponseExchange, RawHeaderListType

log = logging.getLogger(__name__)

BEARER = rfc6750.AUTH_SCHEME

# attributes that can occur once, and the syntax of their values.
# These names are case-sensitive; realm is handled separately.
SINGLE_PARAMS = {
    "scope": rfc6750.scope,
    "error": rfc6750.error,
    "error_description": rfc6750.error_description,
    "error_uri": rfc6750.error_uri,
}

NOT_NQCHAR = re.compile(r"[^\x20\x21\x23-\x5B\x5D-\x7E]")

T = TypeVar("T")


def validate_bearer_challenges(challenges: Sequence[Challenge]) -> None:
    """
    Raise ChallengeStructureError for the first challenge or param that breaks
    the rules of RFC6750, Section 3.
    """
    for index, challenge in enumerate(challenges):
        if challenge.scheme.lower() != BEARER.lower():
            raise ChallengeStructureError(
                f"scheme {challenge.scheme!r} must be case-insensitively equal to {BEARER!r}",
                index,
            )
        if challenge.token68:
            raise ChallengeStructureError(
                f"{BEARER} challenges can't have a token68", index
            )
        seen: Dict[str, int] = defaultdict(int)
        for param_index, param in enumerate(challenge.params):
            # realm is case-insensitive (RFC2617, Section 1.2)
            if param.attribute.lower() == "realm":
                name = "realm"
            elif param.attribute in SINGLE_PARAMS:
                name = param.attribute
            else:
                continue
            seen[name] += 1
            if seen[name] > 1:
                raise ChallengeStructureError(
                    f'more than one "{name}" param', index, param_index
                )
            syntax = SINGLE_PARAMS.get(name)
            if syntax and not re.fullmatch(syntax, param.value, re.VERBOSE):
                raise ChallengeStructureError(
                    f'"{name}" value {param.value!r} has characters that RFC6750 '
                    "doesn't allow",
                    index,
                    param_index,
                )


def invalid_bearer_token(message: str) -> WWWAuthenticateError:
    """
    Return a WWWAuthenticateError for an invalid token, using message as the
    error description. Characters that can't appear there are dropped.
    """
    return WWWAuthenticateError(
        message,
        [
            Challenge(
                BEARER,
                [
                    Param("error", "invalid_token"),
                    Param("error_description", NOT_NQCHAR.sub("", message)),
                ],
            )
        ],
    )


class BearerAuthorizer(Generic[T]):
    """
    Authorizes requests that carry a Bearer token, for a single realm.

    token_authorizer is called with the token. It returns a representation of
    the caller's permissions, or raises WWWAuthenticateError (usually from
    invalid_bearer_token) to reject the token; its challenges are sent in
    the 401 response, with the realm filled in if they don't have one.

    Any other exception, or a None result, is logged and answered with a 500.
    """

    def __init__(self, realm: str, token_authorizer: Callable[[str], T]) -> None:
        try:
            validate_quotable(realm)
        except InvalidCharacterError as why:
            raise InvalidInputError(f"invalid realm: {why}") from why
        if token_authorizer is None:
            raise InvalidInputError("token_authorizer must not be None")
        self.realm = realm
        self.token_authorizer = token_authorizer

    def authorize(
        self, req_headers: RawHeaderListType, exchange: HttpResponseExchange
    ) -> Optional[T]:
        """
        Return the permissions for the request with req_headers, or None if a
        response has been written to exchange instead.
        """
        header_name = AUTHORIZATION.lower().encode("ascii")
        values = [v for (n, v) in req_headers if n.strip().lower() == header_name]
        if not values:
            self.challenge(exchange, "")
            return None
        if len(values) > 1:
            message = (
                f"request must have exactly one header named {AUTHORIZATION}, "
                f"but got {len(values)}"
            )
            self.challenge(exchange, message, Param("error_description", message))
            return None
        scheme, space, token = values[0].decode("iso-8859-1").partition(" ")
        # schemes are case-insensitive (RFC2617, Section 1.2)
        if not space or scheme.lower() != BEARER.lower():
            self.challenge(exchange, "")
            return None
        try:
            permissions = self.token_authorizer(token.lstrip(" "))
        except WWWAuthenticateError as why:
            self.respond(exchange, why, self.realm)
            return None
        except Exception:  # pylint: disable=broad-except
            log.exception("error authorizing bearer token")
            internal_server_error(exchange)
            return None
        if permissions is None:
            log.error("token authorizer returned None without raising an error")
            internal_server_error(exchange)
            return None
        return permissions

    def challenge(
        self, exchange: HttpResponseExchange, message: str, *params: Param
    ) -> None:
        "Send a 401 with a Bearer challenge for the realm, plus params."
        try:
            error = WWWAuthenticateError(
                message, [Challenge(BEARER, [Param("realm", self.realm), *params])]
            )
        except ChallengeError as why:
            log.error("error formatting %s response header: %s", WWW_AUTHENTICATE, why)
            internal_server_error(exchange)
            return
        self.respond(exchange, error, "")

    @staticmethod
    def respond(
        exchange: HttpResponseExchange, error: WWWAuthenticateError, default_realm: str
    ) -> None:
        try:
            validate_bearer_challenges(error.challenges)
            header_value = format_challenges(error.challenges, default_realm)
        except ChallengeError as why:
            log.error(
                "error formatting %s %s response header: %s",
                WWW_AUTHENTICATE,
                BEARER,
                why,
            )
            internal_server_error(exchange)
            return
        text_response(
            exchange,
            b"401",
            b"Unauthorized",
            error.message,
            [(WWW_AUTHENTICATE.encode("ascii"), header_value.encode("utf-8"))],
        )


def internal_server_error(exchange: HttpResponseExchange) -> None:
    text_response(exchange, b"500", b"Internal Server Error", "Internal Server Error")


def text_response(
    exchange: HttpResponseExchange,
    status_code: bytes,
    status_phrase: bytes,
    message: str,
    extra_headers: RawHeaderListType = None,
) -> None:
    headers: RawHeaderListType = [
        (b"Content-Type", b"text/plain; charset=utf-8"),
        (b"X-Content-Type-Options", b"nosniff"),
    ]
    headers.extend(extra_headers or [])
    exchange.response_start(status_code, status_phrase, headers)
    exchange.response_body(f"{message}\n".encode("utf-8"))
    exchange.response_done([])
