#!/usr/bin/env python3

import unittest

from wwwauth import octets


class TestOctets(unittest.TestCase):
    def test_token(self):
        self.assertTrue(octets.is_token("Bearer"))
        self.assertTrue(octets.is_token("SCRAM-SHA-256"))
        self.assertTrue(octets.is_token("!#$%&'*+-.^_`|~"))
        self.assertFalse(octets.is_token(""))
        self.assertFalse(octets.is_token("a b"))
        self.assertFalse(octets.is_token("a=b"))
        self.assertFalse(octets.is_token("caf\xe9"))

    def test_token68(self):
        self.assertTrue(octets.is_token68("abc123=="))
        self.assertTrue(octets.is_token68("a-._~+/z"))
        self.assertFalse(octets.is_token68(""))
        self.assertFalse(octets.is_token68("=="))
        self.assertFalse(octets.is_token68("a=b"))
        self.assertFalse(octets.is_token68("a!"))

    def test_control(self):
        self.assertTrue(octets.is_control_char("\x00"))
        self.assertTrue(octets.is_control_char("\n"))
        self.assertTrue(octets.is_control_char(0x7F))
        self.assertFalse(octets.is_control_char("\t"))
        self.assertFalse(octets.is_control_char(" "))
        self.assertFalse(octets.is_control_char("\xe9"))
        self.assertFalse(octets.is_control_char(None))

    def test_flags(self):
        self.assertEqual(octets.octet_flags("A"), octets.TOKEN | octets.TOKEN68)
        self.assertEqual(octets.octet_flags("/"), octets.TOKEN68)
        self.assertEqual(octets.octet_flags("!"), octets.TOKEN)
        self.assertEqual(octets.octet_flags("Ā"), 0)
        self.assertEqual(octets.octet_flags(None), 0)
        self.assertEqual(len(octets.OCTET_FLAGS), 256)

    def test_find_control_char(self):
        self.assertEqual(octets.find_control_char("ab\x01c"), 2)
        self.assertIsNone(octets.find_control_char("a\tb"))


if __name__ == "__main__":
    unittest.main()
