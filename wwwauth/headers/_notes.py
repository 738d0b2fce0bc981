"""
Common header-related Notes.
"""

from wwwauth.speak import Note, categories, levels


class BAD_SYNTAX(Note):
    category = categories.GENERAL
    level = levels.BAD
    summary = "The %(field_name)s header's syntax isn't valid."
    text = """\
The value for this header doesn't conform to its specified syntax; see [its
definition](%(ref_uri)s) for more information.

Recipients may still be able to make sense of parts of it, but senders need to use the exact
syntax."""


class CHALLENGE_UNPARSEABLE(Note):
    category = categories.AUTH
    level = levels.BAD
    summary = "The %(field_name)s header couldn't be parsed."
    text = """\
This field value isn't a list of challenges, so none of the challenges in it can be used. The
parser reported: %(problem)s."""


class CHALLENGE_EMPTY(Note):
    category = categories.AUTH
    level = levels.WARN
    summary = "The %(scheme)s challenge in the %(field_name)s header has no parameters."
    text = """\
Most authentication schemes need parameters; for example, the `realm` parameter tells the
client which protection space the credentials apply to.

The `%(scheme)s` challenge doesn't have any parameters, or a token68."""


class BEARER_CHALLENGE_INVALID(Note):
    category = categories.AUTH
    level = levels.BAD
    summary = "A Bearer challenge in the %(field_name)s header isn't valid."
    text = """\
[RFC6750](https://tools.ietf.org/html/rfc6750#section-3) restricts the parameters of `Bearer`
challenges: `realm`, `scope`, `error`, `error_description` and `error_uri` can each occur only
once, and their values are limited to certain characters.

Challenge %(challenge_num)s has a problem: %(problem)s."""


class HEADER_NAME_ENCODING(Note):
    category = categories.GENERAL
    level = levels.BAD
    summary = "The %(field_name)s header's name contains non-ASCII characters."
    text = """\
HTTP header field-names can only contain ASCII characters. Non-ASCII characters have been
detected (and possibly removed) in this header name."""


class HEADER_VALUE_ENCODING(Note):
    category = categories.GENERAL
    level = levels.WARN
    summary = "The %(field_name)s header's value contains non-ASCII characters."
    text = """\
HTTP headers use the ISO-8859-1 character set, but in most cases are pure ASCII (a subset of this
encoding).

This header has non-ASCII characters, which have been interpreted as being encoded in
ISO-8859-1. If another encoding is used (e.g., UTF-8), the results may be unpredictable."""


class RESPONSE_HDR_IN_REQUEST(Note):
    category = categories.GENERAL
    level = levels.BAD
    summary = '"%(field_name)s" is a response header.'
    text = """\
%(field_name)s isn't defined to have any meaning in requests, so it has been ignored."""
