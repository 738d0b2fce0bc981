"""
Notes about challenges and the fields that carry them.

The summary field is plain text; show_summary() interpolates its variables
without escaping, so it needs escaping before it's put into HTML.

The longer text field is Markdown. show_text() HTML-escapes the variables
interpolated into it before rendering, so the result is safe for use in HTML.
"""

from enum import Enum
from typing import Any, Dict, Iterator, List, Type, Union

from markdown import markdown
from markupsafe import Markup, escape


class categories(Enum):
    "Note classifications."
    GENERAL = "General"
    AUTH = "Authentication"


class levels(Enum):
    "Note levels."
    WARN = "warning"
    BAD = "bad"


class Note:
    """
    A note about a header field, a challenge, or one of its parameters.
    """

    category = None  # type: categories
    level = None  # type: levels
    summary = ""
    text = ""

    def __init__(self, subject: str, vrs: Dict[str, Union[str, int]] = None) -> None:
        self.subject = subject
        self.vars = vrs or {}

    def __eq__(self, other: Any) -> bool:
        return bool(
            self.__class__ == other.__class__
            and self.vars == other.vars
            and self.subject == other.subject
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.subject}>"

    def show_summary(self) -> str:
        """
        Output a textual summary of the message as a Unicode string.

        Note that if it is displayed in an environment that needs
        encoding (e.g., HTML), that is *NOT* done.
        """
        return self.summary % self.vars

    def show_text(self) -> Markup:
        """
        Show the HTML text for the message as a Unicode string.

        The resulting string is already HTML-encoded.
        """
        return Markup(
            markdown(
                self.text % {k: escape(str(v)) for k, v in self.vars.items()},
                output_format="html",
            )
        )


class NoteList:
    """
    Collects the notes set while processing; its add method is an
    AddNoteMethodType.
    """

    def __init__(self) -> None:
        self.notes: List[Note] = []
        self.note_classes: List[str] = []

    def add(self, subject: str, note: Type[Note], **kw: Union[str, int]) -> None:
        "Record a note."
        self.notes.append(note(subject, kw))
        self.note_classes.append(note.__name__)

    def __iter__(self) -> Iterator[Note]:
        return iter(self.notes)

    def __len__(self) -> int:
        return len(self.notes)
