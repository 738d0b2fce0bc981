#!/usr/bin/env python3

import io
import os
import tempfile
import unittest
from unittest import mock

from wwwauth.cli import load_config, main


class TestCli(unittest.TestCase):
    def run_main(self, *argv):
        with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
            status = main(list(argv))
        return status, out.getvalue()

    def test_parse(self):
        status, out = self.run_main("parse", 'Basic realm="x"', "Negotiate abc==")
        self.assertEqual(status, 0)
        self.assertIn("* Basic", out)
        self.assertIn("  realm: x", out)
        self.assertIn("  token68: abc==", out)

    def test_canonical(self):
        status, out = self.run_main("parse", "--canonical", "basic realm=x")
        self.assertEqual(status, 0)
        self.assertIn('\nBasic realm="x"\n', out)

    def test_unparseable(self):
        status, out = self.run_main("parse", 'Basic realm="x')
        self.assertEqual(status, 1)
        self.assertIn("couldn't be parsed", out)

    def test_not_serialisable(self):
        status, out = self.run_main("parse", "--canonical", "Basic")
        self.assertEqual(status, 1)
        self.assertIn("Error: can't serialise challenges", out)
        self.assertIn("has no parameters", out)

    def test_non_ascii(self):
        status, out = self.run_main("parse", "--canonical", 'Basic realm="caf\xe9"')
        self.assertEqual(status, 0)
        self.assertIn("  realm: caf\xe9\n", out)
        self.assertIn('\nBasic realm="caf\xe9"\n', out)
        self.assertNotIn("\xc3", out)

    def test_not_latin1(self):
        status, out = self.run_main("parse", 'Basic realm="Ā"')
        self.assertEqual(status, 2)
        self.assertIn("Error:", out)
        self.assertIn("position 13", out)

    def test_verbose(self):
        status, out = self.run_main("parse", "-v", "Basic")
        self.assertEqual(status, 0)
        self.assertIn("Most authentication schemes need parameters", out)

    def test_proxy(self):
        status, out = self.run_main("parse", "--proxy", 'Basic realm="p"')
        self.assertEqual(status, 0)
        self.assertIn("  realm: p", out)

    def test_config(self):
        fd, path = tempfile.mkstemp(suffix=".conf")
        self.addCleanup(os.remove, path)
        with os.fdopen(fd, "w") as config_file:
            config_file.write("[wwwauth]\ndefault_realm = example\n")
        status, out = self.run_main(
            "parse", "--canonical", "-c", path, "Bearer error=invalid_token"
        )
        self.assertEqual(status, 0)
        self.assertIn('Bearer realm="example",error="invalid_token"', out)

    def test_load_config_defaults(self):
        config = load_config(None)
        self.assertEqual(config["default_realm"], "")
        self.assertFalse(config.getboolean("enable_local_access"))
        self.assertEqual(config.getint("connect_timeout"), 10)
        self.assertEqual(config.getint("read_timeout"), 15)

    def test_no_command(self):
        with mock.patch("sys.stderr", new_callable=io.StringIO):
            self.assertRaises(SystemExit, main, [])


if __name__ == "__main__":
    unittest.main()
