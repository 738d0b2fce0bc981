#!/usr/bin/env python

from wwwauth import headers
from wwwauth.challenge import WWW_AUTHENTICATE, Challenge, Param
from wwwauth.parse import CHALLENGE_PARAM_SKIPPED
from wwwauth.syntax import rfc7235


class www_authenticate(headers.ChallengeHeader):
    canonical_name = WWW_AUTHENTICATE
    reference = f"{rfc7235.SPEC_URL}#header.www-authenticate"
    syntax = rfc7235.WWW_Authenticate


class BasicWWWAuthTest(headers.HeaderTest):
    name = "WWW-Authenticate"
    inputs = [b'Basic realm="simple"']
    expected_out = [Challenge("Basic", [Param("realm", "simple")])]


class MultipleWWWAuthTest(headers.HeaderTest):
    name = "WWW-Authenticate"
    inputs = [
        b'Newauth realm="apps", type=1, title="Login to \\"apps\\""',
        b'Basic realm="simple"',
    ]
    expected_out = [
        Challenge(
            "Newauth",
            [
                Param("realm", "apps"),
                Param("type", "1"),
                Param("title", 'Login to "apps"'),
            ],
        ),
        Challenge("Basic", [Param("realm", "simple")]),
    ]


class Token68WWWAuthTest(headers.HeaderTest):
    name = "WWW-Authenticate"
    inputs = [b"Negotiate abc123=="]
    expected_out = [Challenge("Negotiate", token68="abc123==")]


class EmptyWWWAuthTest(headers.HeaderTest):
    name = "WWW-Authenticate"
    inputs = [b"Basic"]
    expected_out = [Challenge("Basic")]
    expected_err = [headers.CHALLENGE_EMPTY]


class UnterminatedWWWAuthTest(headers.HeaderTest):
    name = "WWW-Authenticate"
    inputs = [b'Basic realm="unterminated']
    expected_out = []
    expected_err = [headers.BAD_SYNTAX, headers.CHALLENGE_UNPARSEABLE]


class SkippedParamWWWAuthTest(headers.HeaderTest):
    name = "WWW-Authenticate"
    inputs = [b'Bearer realm="r",,scope=']
    expected_out = [Challenge("Bearer", [Param("realm", "r")])]
    expected_err = [headers.BAD_SYNTAX, CHALLENGE_PARAM_SKIPPED]


class BearerWWWAuthTest(headers.HeaderTest):
    name = "WWW-Authenticate"
    inputs = [
        b'Bearer realm="example",error="invalid_token",'
        b'error_description="The access token expired"'
    ]
    expected_out = [
        Challenge(
            "Bearer",
            [
                Param("realm", "example"),
                Param("error", "invalid_token"),
                Param("error_description", "The access token expired"),
            ],
        )
    ]


class BearerTwoRealmsWWWAuthTest(headers.HeaderTest):
    name = "WWW-Authenticate"
    inputs = [b'Bearer realm="a", Realm="b"']
    expected_out = [Challenge("Bearer", [Param("realm", "a"), Param("Realm", "b")])]
    expected_err = [headers.BEARER_CHALLENGE_INVALID]


class NonAsciiWWWAuthTest(headers.HeaderTest):
    name = "WWW-Authenticate"
    inputs = [b'Basic realm="caf\xe9"']
    expected_out = [Challenge("Basic", [Param("realm", "caf\xe9")])]
    expected_err = [headers.HEADER_VALUE_ENCODING]
