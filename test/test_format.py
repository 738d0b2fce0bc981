#!/usr/bin/env python3

import unittest

from wwwauth.challenge import Challenge, Param
from wwwauth.error import ChallengeStructureError, InvalidInputError
from wwwauth.format import WWWAuthenticateError, format_challenges
from wwwauth.parse import parse_challenges

BEARER_EXAMPLE = (
    'Bearer realm="example",error="invalid_token",'
    'error_description="The access token expired"'
)


class TestFormatChallenges(unittest.TestCase):
    def test_format(self):
        i = 0
        for (challenges, default_realm, expected) in [
            ([Challenge("Basic", [Param("realm", "x")])], "", 'Basic realm="x"'),
            ([Challenge("basic", [Param("realm", "x")])], "", 'Basic realm="x"'),
            ([Challenge("BEARER", [Param("realm", "x")])], "", 'Bearer realm="x"'),
            ([Challenge("newAuth", [Param("realm", "x")])], "", 'newAuth realm="x"'),
            ([Challenge("Basic", [Param("Realm", "x")])], "", 'Basic Realm="x"'),
            (
                [Challenge("Bearer", [Param("error", "invalid_token")])],
                "api",
                'Bearer realm="api",error="invalid_token"',
            ),
            (
                [Challenge("Bearer", [Param("error", "invalid_token")])],
                "",
                'Bearer realm="",error="invalid_token"',
            ),
            ([Challenge("Negotiate", token68="abc==")], "api", "Negotiate abc=="),
            (
                [Challenge("Newauth", [Param("title", 'Login to "apps"')])],
                "apps",
                'Newauth realm="apps",title="Login to \\"apps\\""',
            ),
            (
                [
                    Challenge("Basic", [Param("realm", "a")]),
                    Challenge("Digest", [Param("realm", "b"), Param("nonce", "n")]),
                ],
                "",
                'Basic realm="a",Digest realm="b",nonce="n"',
            ),
        ]:
            self.assertEqual(
                format_challenges(challenges, default_realm), expected, f"[{i}]"
            )
            i += 1

    def test_bearer_example(self):
        self.assertEqual(format_challenges(parse_challenges(BEARER_EXAMPLE)), BEARER_EXAMPLE)

    def test_round_trip(self):
        for challenges in [
            [Challenge("Basic", [Param("realm", "simple")])],
            [Challenge("Negotiate", token68="abc123==")],
            [
                Challenge(
                    "Newauth",
                    [Param("realm", "apps"), Param("title", 'he said "hi"\\ok')],
                ),
                Challenge("Basic", [Param("realm", "")]),
            ],
            [Challenge("Bearer", [Param("realm", "r"), Param("scope", "a b\tc")])],
        ]:
            formatted = format_challenges(challenges)
            self.assertEqual(parse_challenges(formatted), challenges)
            self.assertEqual(format_challenges(parse_challenges(formatted)), formatted)

    def test_idempotent(self):
        for instr in [
            'Newauth realm="apps", type=1, title="Login to \\"apps\\"", Basic realm="simple"',
            "basic realm=x, bearer error=invalid_token",
            "Negotiate abc123==",
        ]:
            once = format_challenges(parse_challenges(instr), "d")
            self.assertEqual(format_challenges(parse_challenges(once), "d"), once)

    def test_empty_list(self):
        with self.assertRaises(InvalidInputError) as cm:
            format_challenges([])
        self.assertNotIsInstance(cm.exception, ChallengeStructureError)

    def test_bad_default_realm(self):
        with self.assertRaises(InvalidInputError) as cm:
            format_challenges([Challenge("Basic", [Param("realm", "x")])], "a\nb")
        self.assertIn("default realm", str(cm.exception))

    def test_structure_errors(self):
        for (challenges, challenge_index, param_index) in [
            ([Challenge("Basic", [Param("realm", "x")], token68="abc")], 0, None),
            ([Challenge("Basic")], 0, None),
            ([Challenge("Basic", token68="a b")], 0, None),
            ([Challenge("Basic", token68="==")], 0, None),
            ([Challenge("Bad Scheme", [Param("realm", "x")])], 0, None),
            ([Challenge("", [Param("realm", "x")])], 0, None),
            ([Challenge("Basic", [Param("realm", "x"), Param("", "y")])], 0, 1),
            ([Challenge("Basic", [Param("re alm", "x")])], 0, 0),
            ([Challenge("Basic", [Param("realm", "x\x00")])], 0, 0),
            (
                [
                    Challenge("Basic", [Param("realm", "x")]),
                    Challenge("Basic", [Param("realm", "x\r\n")]),
                ],
                1,
                0,
            ),
            (["Basic realm=x"], 0, None),
        ]:
            with self.assertRaises(ChallengeStructureError, msg=repr(challenges)) as cm:
                format_challenges(challenges)
            self.assertEqual(cm.exception.challenge_index, challenge_index)
            self.assertEqual(cm.exception.param_index, param_index)

    def test_structure_error_message(self):
        with self.assertRaises(ChallengeStructureError) as cm:
            format_challenges(
                [
                    Challenge("Basic", [Param("realm", "x")]),
                    Challenge("Basic", [Param("a b", "x")]),
                ]
            )
        self.assertTrue(str(cm.exception).startswith("challenges[1].params[0]: "))
        self.assertEqual(cm.exception.location(), "challenges[1].params[0]")


class TestWWWAuthenticateError(unittest.TestCase):
    def test_header_value(self):
        error = WWWAuthenticateError(
            "token expired",
            [Challenge("Bearer", [Param("error", "invalid_token")])],
            "api",
        )
        self.assertEqual(error.message, "token expired")
        self.assertEqual(str(error), "token expired")
        self.assertEqual(error.header_value, 'Bearer realm="api",error="invalid_token"')
        self.assertIsInstance(error.challenges, tuple)

    def test_invalid(self):
        self.assertRaises(InvalidInputError, WWWAuthenticateError, "nope", [])
        self.assertRaises(
            ChallengeStructureError,
            WWWAuthenticateError,
            "nope",
            [Challenge("Basic", [Param("realm", "\x00")])],
        )


if __name__ == "__main__":
    unittest.main()
