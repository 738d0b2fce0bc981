"""
Authentication challenges, as carried by WWW-Authenticate and
Proxy-Authenticate (RFC7235, Section 2.1).
"""

from typing import Any, Iterable, List, Optional, Tuple

WWW_AUTHENTICATE = "WWW-Authenticate"
PROXY_AUTHENTICATE = "Proxy-Authenticate"
AUTHORIZATION = "Authorization"

# <https://www.iana.org/assignments/http-authschemes/>
AUTHENTICATION_SCHEMES = {
    scheme.lower(): scheme
    for scheme in [
        "Basic",
        "Bearer",
        "Concealed",
        "Digest",
        "DPoP",
        "GNAP",
        "HOBA",
        "Mutual",
        "Negotiate",
        "OAuth",
        "PrivateToken",
        "SCRAM-SHA-1",
        "SCRAM-SHA-256",
        "vapid",
    ]
}


def authentication_schemes() -> List[str]:
    "Return the registered authentication schemes, canonically spelled."
    return sorted(AUTHENTICATION_SCHEMES.values())


def canonical_scheme(scheme: str) -> str:
    """
    Return the registered spelling of scheme if it's known; otherwise, return it
    unchanged. Schemes are case-insensitive (RFC7235, Section 2.1).
    """
    return AUTHENTICATION_SCHEMES.get(scheme.lower(), scheme)


class Param:
    "An auth-param; the value is unquoted."

    def __init__(self, attribute: str, value: str) -> None:
        self.attribute = attribute
        self.value = value

    def __eq__(self, other: Any) -> bool:
        return bool(
            isinstance(other, Param)
            and self.attribute == other.attribute
            and self.value == other.value
        )

    def __repr__(self) -> str:
        return f"Param({self.attribute!r}, {self.value!r})"


class Challenge:
    """
    A single challenge: an authentication scheme with either a token68 or a
    list of auth-params.

    params is kept as a tuple; its order is used when serialising, but not when
    comparing challenges.
    """

    def __init__(
        self, scheme: str, params: Iterable[Param] = (), token68: str = ""
    ) -> None:
        self.scheme = scheme
        self.params: Tuple[Param, ...] = tuple(params)
        self.token68 = token68

    def get_params(self, attribute: str, case_sensitive: bool = True) -> List[str]:
        "Return the values of the params named attribute, in order."
        if case_sensitive:
            return [p.value for p in self.params if p.attribute == attribute]
        attribute = attribute.lower()
        return [p.value for p in self.params if p.attribute.lower() == attribute]

    @property
    def realm(self) -> Optional[str]:
        "The first realm param's value, if there is one."
        realms = self.get_params("realm", case_sensitive=False)
        if realms:
            return realms[0]
        return None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Challenge):
            return False
        return bool(
            self.scheme.lower() == other.scheme.lower()
            and self.token68 == other.token68
            and sorted((p.attribute, p.value) for p in self.params)
            == sorted((p.attribute, p.value) for p in other.params)
        )

    def __repr__(self) -> str:
        if self.token68:
            return f"Challenge({self.scheme!r}, token68={self.token68!r})"
        return f"Challenge({self.scheme!r}, {list(self.params)!r})"
