"""
Octet classification for the challenge grammar.

OCTET_FLAGS is built once at import time and never changed afterwards, so
lookups are safe from any thread.
"""

import string
from typing import Optional, Union

# flags
TOKEN = 0x01  # RFC7230 tchar
TOKEN68 = 0x02  # RFC7235 token68, not counting the "=" padding
CONTROL = 0x04  # CTL other than HTAB; can't appear in a quoted-string

TCHAR = "!#$%&'*+-.^_`|~" + string.ascii_letters + string.digits
TOKEN68_CHAR = "-._~+/" + string.ascii_letters + string.digits


def _build_flags() -> bytes:
    flags = bytearray(256)
    for char in TCHAR:
        flags[ord(char)] |= TOKEN
    for char in TOKEN68_CHAR:
        flags[ord(char)] |= TOKEN68
    for octet in list(range(0x20)) + [0x7F]:
        if octet != 0x09:
            flags[octet] |= CONTROL
    return bytes(flags)


OCTET_FLAGS = _build_flags()


def octet_flags(char: Union[str, int, None]) -> int:
    """
    Return the flags for a single character or octet. None (the end of input)
    and characters outside of ISO-8859-1 have no flags.
    """
    if char is None:
        return 0
    octet = char if isinstance(char, int) else ord(char)
    if octet > 0xFF:
        return 0
    return OCTET_FLAGS[octet]


def is_token_char(char: Union[str, int, None]) -> bool:
    return bool(octet_flags(char) & TOKEN)


def is_token68_char(char: Union[str, int, None]) -> bool:
    return bool(octet_flags(char) & TOKEN68)


def is_control_char(char: Union[str, int, None]) -> bool:
    return bool(octet_flags(char) & CONTROL)


def is_token(value: str) -> bool:
    "Is value a valid RFC7230 token?"
    return bool(value) and all(is_token_char(char) for char in value)


def is_token68(value: str) -> bool:
    "Is value a valid RFC7235 token68, including any trailing padding?"
    body = value.rstrip("=")
    return bool(body) and all(is_token68_char(char) for char in body)


def find_control_char(value: str) -> Optional[int]:
    "Return the position of the first control character in value, if any."
    for position, char in enumerate(value):
        if is_control_char(char):
            return position
    return None
