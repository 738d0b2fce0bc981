"""
Text output for the command line.
"""

from html.parser import HTMLParser
import re
import textwrap
from typing import Callable, List, Optional, Sequence

from wwwauth.challenge import Challenge
from wwwauth.format import format_challenges
from wwwauth.speak import Note, NoteList, categories, levels
from wwwauth.type import StrHeaderListType

NL = "\n"


class TextFormatter:
    """
    Format challenges and the notes about them as text.
    """

    note_categories = [categories.GENERAL, categories.AUTH]

    error_template = "Error: %s\n"

    def __init__(
        self, output: Callable[[str], None], tty_out: bool = False, verbose: bool = False
    ) -> None:
        self.output = output
        self.tty_out = tty_out
        self.verbose = verbose

    def error_output(self, message: str) -> None:
        self.output(self.error_template % message)

    def challenge_output(
        self,
        challenges: Sequence[Challenge],
        notes: NoteList,
        canonical: Optional[str] = None,
    ) -> None:
        "Write out challenges, the notes about them, and the canonical form."
        self.output(self.format_challenges(challenges) + NL)
        if canonical is not None:
            self.output(NL + canonical + NL)
        recommendations = self.format_recommendations(notes)
        if recommendations:
            self.output(NL + recommendations)

    @staticmethod
    def format_headers(status: str, headers: StrHeaderListType) -> str:
        return NL.join([status] + [f"{h[0]}:{h[1]}" for h in headers])

    def format_challenges(self, challenges: Sequence[Challenge]) -> str:
        out = []
        for challenge in challenges:
            out.append(f"* {self.colorize(None, challenge.scheme)}")
            if challenge.token68:
                out.append(f"  token68: {challenge.token68}")
            for param in challenge.params:
                out.append(f"  {param.attribute}: {param.value}")
        return NL.join(out)

    @staticmethod
    def format_canonical(challenges: Sequence[Challenge], default_realm: str) -> str:
        return format_challenges(challenges, default_realm)

    def format_recommendations(self, notes: NoteList) -> str:
        return "".join(
            [
                self.format_recommendation(notes, category)
                for category in self.note_categories
            ]
        )

    def format_recommendation(self, notes: NoteList, category: categories) -> str:
        selected = [note for note in notes if note.category == category]
        if not selected:
            return ""
        out = [f"* {category.value}:"]
        for note in selected:
            out.append(f"  * {self.colorize(note.level, note.show_summary())}")
            if self.verbose:
                out.append("")
                out.extend("    " + line for line in self.format_text(note))
                out.append("")
        out.append(NL)
        return NL.join(out)

    @staticmethod
    def format_text(note: Note) -> List[str]:
        return textwrap.wrap(
            strip_tags(re.sub(r"(?m)\s\s+", " ", note.show_text()))
        )

    def colorize(self, level: Optional[levels], instr: str) -> str:
        if self.tty_out:
            color_start = "\033[1;34m"
            color_end = "\033[0;39m"
            if level == levels.BAD:
                color_start = "\033[1;31m"
            elif level == levels.WARN:
                color_start = "\033[1;33m"
            return color_start + instr + color_end
        return instr


class MLStripper(HTMLParser):
    def __init__(self) -> None:
        HTMLParser.__init__(self)
        self.reset()
        self.fed: List[str] = []

    def handle_data(self, data: str) -> None:
        self.fed.append(data)

    def get_data(self) -> str:
        return "".join(self.fed)


def strip_tags(html: str) -> str:
    stripper = MLStripper()
    stripper.feed(html)
    return stripper.get_data()
