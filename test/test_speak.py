#!/usr/bin/env python3

import unittest

from markupsafe import Markup

from wwwauth.speak import Note, NoteList, categories, levels


class SAMPLE_NOTE(Note):
    category = categories.AUTH
    level = levels.WARN
    summary = "The %(scheme)s challenge is odd."
    text = "The `%(scheme)s` challenge has %(what)s."


class TestNote(unittest.TestCase):
    def test_summary_not_escaped(self):
        note = SAMPLE_NOTE("challenge", {"scheme": "<b>&", "what": "x"})
        summary = note.show_summary()
        self.assertEqual(summary, "The <b>& challenge is odd.")
        self.assertNotIsInstance(summary, Markup)

    def test_text_escaped(self):
        note = SAMPLE_NOTE("challenge", {"scheme": "Basic", "what": "<script>"})
        text = note.show_text()
        self.assertIsInstance(text, Markup)
        self.assertIn("<code>Basic</code>", text)
        self.assertIn("&lt;script&gt;", text)
        self.assertNotIn("<script>", text)

    def test_note_list(self):
        notes = NoteList()
        notes.add("challenge", SAMPLE_NOTE, scheme="Basic", what="x")
        self.assertEqual(len(notes), 1)
        self.assertEqual(notes.note_classes, ["SAMPLE_NOTE"])
        self.assertEqual(
            list(notes), [SAMPLE_NOTE("challenge", {"scheme": "Basic", "what": "x"})]
        )


if __name__ == "__main__":
    unittest.main()
