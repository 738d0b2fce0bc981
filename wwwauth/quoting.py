"""
quoted-string encoding (RFC7230, Section 3.2.6).

Decoding happens in the parser, which needs to control its own position.
"""

from wwwauth.error import InvalidCharacterError
from wwwauth.octets import find_control_char


def validate_quotable(value: str) -> None:
    """
    Raise InvalidCharacterError if value can't be carried in a quoted-string;
    i.e., it contains a control character other than HTAB.
    """
    position = find_control_char(value)
    if position is not None:
        raise InvalidCharacterError(position, value[position])


def quote_string(value: str) -> str:
    """
    Return value as a quoted-string that parses back into value, escaping
    double quotes and backslashes with quoted-pairs.
    """
    validate_quotable(value)
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
