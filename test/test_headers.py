#!/usr/bin/env python3

import unittest

from wwwauth.challenge import Challenge, Param
from wwwauth.headers import HeaderProcessor
from wwwauth.headers.proxy_authenticate import (
    ProxyAuthInRequestTest,
    ProxyAuthTest,
    proxy_authenticate,
)
from wwwauth.headers.www_authenticate import (
    BasicWWWAuthTest,
    BearerTwoRealmsWWWAuthTest,
    BearerWWWAuthTest,
    EmptyWWWAuthTest,
    MultipleWWWAuthTest,
    NonAsciiWWWAuthTest,
    SkippedParamWWWAuthTest,
    Token68WWWAuthTest,
    UnterminatedWWWAuthTest,
    www_authenticate,
)
from wwwauth.speak import NoteList


class TestHeaderProcessor(unittest.TestCase):
    def setUp(self):
        self.notes = NoteList()

    def test_find_handler(self):
        self.assertIs(HeaderProcessor.find_header_handler("WWW-Authenticate"), www_authenticate)
        self.assertIs(
            HeaderProcessor.find_header_handler(" proxy-authenticate"), proxy_authenticate
        )
        self.assertIsNone(HeaderProcessor.find_header_handler("X-Unknown"))
        self.assertIsNone(HeaderProcessor.find_header_handler("_notes"))
        self.assertEqual(HeaderProcessor.name_token("WWW-Authenticate"), "www_authenticate")

    def test_process(self):
        processor = HeaderProcessor(self.notes.add)
        str_headers, parsed = processor.process(
            [
                (b"Content-Type", b"text/plain"),
                (b"www-authenticate", b'Basic realm="a"'),
                (b"WWW-Authenticate", b'Bearer realm="b"'),
            ]
        )
        self.assertEqual(
            str_headers,
            [
                ("Content-Type", "text/plain"),
                ("www-authenticate", 'Basic realm="a"'),
                ("WWW-Authenticate", 'Bearer realm="b"'),
            ],
        )
        self.assertEqual(list(parsed.keys()), ["www-authenticate"])
        self.assertEqual(
            parsed["www-authenticate"],
            [
                Challenge("Basic", [Param("realm", "a")]),
                Challenge("Bearer", [Param("realm", "b")]),
            ],
        )
        self.assertEqual(len(self.notes), 0)

    def test_bad_line_skipped(self):
        processor = HeaderProcessor(self.notes.add)
        _, parsed = processor.process(
            [
                (b"WWW-Authenticate", b'Basic realm="a'),
                (b"WWW-Authenticate", b'Bearer realm="b"'),
            ]
        )
        self.assertEqual(
            parsed["www-authenticate"], [Challenge("Bearer", [Param("realm", "b")])]
        )
        self.assertIn("CHALLENGE_UNPARSEABLE", self.notes.note_classes)
        note = self.notes.notes[self.notes.note_classes.index("CHALLENGE_UNPARSEABLE")]
        self.assertEqual(note.subject, "offset-1")
        self.assertEqual(note.vars["field_name"], "WWW-Authenticate")
        self.assertIn("position 14", note.show_text())

    def test_handler_accumulates(self):
        handler = www_authenticate("WWW-Authenticate", is_request=True)
        handler.handle_input('Basic realm="a"', self.add_note)
        handler.handle_input('Negotiate realm="b', self.add_note)
        handler.handle_input("Negotiate abc==", self.add_note)
        handler.finish(self.add_note)
        self.assertEqual(
            handler.value,
            [
                Challenge("Basic", [Param("realm", "a")]),
                Challenge("Negotiate", token68="abc=="),
            ],
        )
        self.assertEqual(
            self.notes.note_classes,
            ["BAD_SYNTAX", "CHALLENGE_UNPARSEABLE", "RESPONSE_HDR_IN_REQUEST"],
        )

    def add_note(self, note, **kw):
        self.notes.add("test", note, field_name="WWW-Authenticate", **kw)

    def test_bearer_note_subject(self):
        processor = HeaderProcessor(self.notes.add)
        processor.process([(b"WWW-Authenticate", b"Basic realm=a, Bearer abc")])
        self.assertEqual(self.notes.note_classes, ["BEARER_CHALLENGE_INVALID"])
        note = self.notes.notes[0]
        self.assertEqual(note.subject, "header-www-authenticate")
        self.assertEqual(note.vars["challenge_num"], 2)


if __name__ == "__main__":
    unittest.main()
