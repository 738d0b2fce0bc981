#!/usr/bin/env python

"""
Header handlers for the fields that carry challenges.

HeaderProcessor.process() will process a list of (bytes name, bytes value)
tuples; fields without a handler are passed through untouched.
"""

from functools import partial
import re
import sys
from typing import Any, Dict, List, Optional, Tuple, Type, Union
import unittest

from wwwauth.bearer import BEARER, validate_bearer_challenges
from wwwauth.challenge import Challenge
from wwwauth.error import ChallengeStructureError, ChallengeSyntaxError
from wwwauth.parse import parse_challenges
from wwwauth.speak import Note, NoteList
from wwwauth.syntax import rfc7230
from wwwauth.type import (
    AddNoteMethodType,
    HeaderDictType,
    RawHeaderListType,
    StrHeaderListType,
)

from ._notes import *

RE_FLAGS = re.VERBOSE | re.IGNORECASE


class ChallengeHeader:
    """
    A handler for a header whose value is a list of challenges. Its value is the
    list of Challenges from all of its field lines, in order.
    """

    canonical_name: str = None
    reference: str = None
    syntax: Union[str, rfc7230.list_rule] = None  # Verbose regular expression to match.

    def __init__(self, wire_name: str, is_request: bool = False) -> None:
        self.wire_name = wire_name.strip()
        self.is_request = is_request
        self.norm_name = self.wire_name.lower()
        if self.canonical_name is None:
            self.canonical_name = self.wire_name
        self.value: List[Challenge] = []

    def parse(self, field_value: str, add_note: AddNoteMethodType) -> List[Challenge]:
        """
        Given a string value and an add_note function, parse and return the result."""
        try:
            return parse_challenges(field_value, add_note=add_note)
        except ChallengeSyntaxError as why:
            add_note(CHALLENGE_UNPARSEABLE, problem=str(why))
            raise

    def handle_input(self, field_value: str, add_note: AddNoteMethodType) -> None:
        """
        Basic input processing on a new field value.
        """
        if not re.match(rf"^\s*(?:{self.syntax})\s*$", field_value, RE_FLAGS):
            add_note(BAD_SYNTAX, ref_uri=self.reference)
        try:
            self.value.extend(self.parse(field_value.strip(), add_note))
        except ValueError:
            return  # we assume that the parser made a note of the problem.

    def finish(self, add_note: AddNoteMethodType) -> None:
        """
        Called when all headers are available.
        """
        if self.is_request:
            add_note(RESPONSE_HDR_IN_REQUEST)
        self.evaluate(add_note)

    def evaluate(self, add_note: AddNoteMethodType) -> None:
        for index, challenge in enumerate(self.value):
            if not challenge.params and not challenge.token68:
                add_note(CHALLENGE_EMPTY, scheme=challenge.scheme)
            if challenge.scheme.lower() == BEARER.lower():
                try:
                    validate_bearer_challenges([challenge])
                except ChallengeStructureError as why:
                    add_note(
                        BEARER_CHALLENGE_INVALID,
                        challenge_num=index + 1,
                        problem=why.reason,
                    )


class HeaderProcessor:
    """
    Parses and runs checks on a set of headers.
    """

    def __init__(self, add_note: AddNoteMethodType, is_request: bool = False) -> None:
        self.add_note = add_note
        self.is_request = is_request
        self._header_handlers: Dict[str, ChallengeHeader] = {}

    def process(
        self, headers: RawHeaderListType
    ) -> Tuple[StrHeaderListType, HeaderDictType]:
        """
        Given a list of (bytes name, bytes value) headers:
         - call add_note as appropriate
        Returns:
         - a list of unicode header tuples
         - a dict of parsed header values, keyed by lowercase field name
        """
        unicode_headers = []  # unicode version of the header tuples
        parsed_headers = {}  # dictionary of parsed header values
        offset = 0  # what number header we're on

        for name, value in headers:
            offset += 1
            add_note = partial(self.add_note, f"offset-{offset}")

            # decode the header to make it unicode clean
            try:
                str_name = name.decode("ascii", "strict")
            except UnicodeError:
                str_name = name.decode("ascii", "ignore")
                add_note(HEADER_NAME_ENCODING, field_name=str_name)
            try:
                str_value = value.decode("ascii", "strict")
            except UnicodeError:
                str_value = value.decode("iso-8859-1", "replace")
                add_note(HEADER_VALUE_ENCODING, field_name=str_name)
            unicode_headers.append((str_name, str_value))

            header_handler = self.get_header_handler(str_name)
            if header_handler is None:
                continue
            field_add_note = partial(
                add_note,
                field_name=header_handler.canonical_name,
            )
            header_handler.handle_input(str_value, field_add_note)

        # check each of the complete header values and get the parsed value
        for header_handler in list(self._header_handlers.values()):
            header_add_note = partial(
                self.add_note,
                f"header-{header_handler.norm_name}",
                field_name=header_handler.canonical_name,
            )
            header_handler.finish(header_add_note)
            parsed_headers[header_handler.norm_name] = header_handler.value

        return unicode_headers, parsed_headers

    def get_header_handler(self, header_name: str) -> Optional[ChallengeHeader]:
        """
        If a header handler has already been instantiated for header_name, return it;
        otherwise, instantiate and return a new one. Returns None if there's no
        handler for header_name.
        """
        norm_name = header_name.strip().lower()
        if norm_name in self._header_handlers:
            return self._header_handlers[norm_name]
        handler_class = self.find_header_handler(header_name)
        if handler_class is None:
            return None
        handler = handler_class(header_name, self.is_request)
        self._header_handlers[norm_name] = handler
        return handler

    @staticmethod
    def find_header_handler(header_name: str) -> Optional[Type[ChallengeHeader]]:
        """
        Return a header handler class for the given field name, or None.
        """
        name_token = HeaderProcessor.name_token(header_name)
        hdr_module = HeaderProcessor.find_header_module(name_token)
        if hdr_module and hasattr(hdr_module, name_token):
            return getattr(hdr_module, name_token)  # type: ignore
        return None

    @staticmethod
    def find_header_module(header_name: str) -> Any:
        """
        Return a module for the given field name, or None if it can't be found.
        """
        name_token = HeaderProcessor.name_token(header_name)
        if not name_token or name_token[0] == "_":  # these are special
            return None
        try:
            module_name = f"wwwauth.headers.{name_token}"
            __import__(module_name)
            return sys.modules[module_name]
        except (ImportError, KeyError, TypeError):
            return None

    @staticmethod
    def name_token(header_name: str) -> str:
        """
        Return a tokenised, python-friendly name for a header.
        """
        return header_name.strip().replace("-", "_").lower()


class HeaderTest(unittest.TestCase):
    """
    Testing machinery for headers.
    """

    name: str = None
    inputs: List[bytes] = []
    expected_out: Any = []
    expected_err: List[Type[Note]] = []
    is_request = False

    def setUp(self) -> None:
        "Test setup."
        self.notes = NoteList()

    def test_header(self) -> Any:
        "Test the header."
        if not self.name:
            return self.skipTest("")
        name = self.name.encode("utf-8")
        hp = HeaderProcessor(self.notes.add, self.is_request)
        _, parsed_headers = hp.process([(name, inp) for inp in self.inputs])
        out = parsed_headers.get(self.name.lower(), "HEADER HANDLER NOT FOUND")
        self.assertEqual(self.expected_out, out)
        diff = {n.__name__ for n in self.expected_err}.symmetric_difference(
            set(self.notes.note_classes)
        )
        for note in self.notes:  # check formatting
            note.vars.update({"field_name": self.name})
            self.assertTrue(note.show_summary())
            self.assertTrue(note.show_text())
        self.assertEqual(len(diff), 0, f"Mismatched notes: {diff}")
        return None
