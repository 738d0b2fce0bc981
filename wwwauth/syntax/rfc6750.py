"""
Regex for RFC6750

These regex are derived from the attribute value rules of the Bearer
challenge in RFC6750, Section 3, and from scope-token in RFC6749,
Section 3.3.

  <https://tools.ietf.org/html/rfc6750#section-3>

They match the unquoted value of an auth-param, and should be processed
with re.VERBOSE.
"""

# pylint: disable=invalid-name

from .rfc5234 import SP

SPEC_URL = "https://tools.ietf.org/html/rfc6750"

AUTH_SCHEME = "Bearer"

# NQSCHAR = %x21 / %x23-5B / %x5D-7E

NQSCHAR = r"[\x21\x23-\x5B\x5D-\x7E]"

# NQCHAR = %x20-21 / %x23-5B / %x5D-7E

NQCHAR = r"[\x20\x21\x23-\x5B\x5D-\x7E]"

# scope-token = 1*NQSCHAR

scope_token = rf"{NQSCHAR}+"

# scope = scope-token *( SP scope-token )

scope = rf"(?: {scope_token} (?: {SP} {scope_token} )* )"

# error = *NQCHAR

error = rf"{NQCHAR}*"

# error-description = *NQCHAR

error_description = rf"{NQCHAR}*"

# error-uri = *NQSCHAR

error_uri = rf"{NQSCHAR}*"
