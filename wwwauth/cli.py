#!/usr/bin/env python

"""
CLI interface to wwwauth
"""

from argparse import ArgumentParser, Namespace
from configparser import ConfigParser, SectionProxy
import logging
import sys
from typing import List, Optional, Sequence

import thor

from wwwauth import __version__
from wwwauth.challenge import PROXY_AUTHENTICATE, WWW_AUTHENTICATE, Challenge
from wwwauth.error import ChallengeError
from wwwauth.fetch import ChallengeFetcher
from wwwauth.formatter import TextFormatter
from wwwauth.headers import HeaderProcessor
from wwwauth.speak import NoteList, levels

CONFIG_DEFAULTS = {
    "wwwauth": {
        "default_realm": "",
        "enable_local_access": "False",
        "connect_timeout": "10",
        "read_timeout": "15",
    }
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = ArgumentParser(prog="wwwauth")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    common = ArgumentParser(add_help=False)
    common.add_argument(
        "-c", "--config", dest="config", help="configuration file to read"
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        dest="verbose",
        help="show note details and debug logging",
    )
    common.add_argument(
        "--canonical",
        action="store_true",
        dest="canonical",
        help="show the challenges re-serialised as a single field value",
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True

    parse_parser = subparsers.add_parser(
        "parse", parents=[common], help="parse WWW-Authenticate field values"
    )
    parse_parser.add_argument("values", nargs="+", metavar="VALUE")
    parse_parser.add_argument(
        "--proxy",
        action="store_true",
        dest="proxy",
        help=f"treat the values as {PROXY_AUTHENTICATE}",
    )

    fetch_parser = subparsers.add_parser(
        "fetch", parents=[common], help="fetch a URL and show its challenges"
    )
    fetch_parser.add_argument("url", help="URL to fetch")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = load_config(args.config)
    formatter = TextFormatter(output, sys.stdout.isatty(), args.verbose)
    if args.command == "fetch":
        return fetch_command(args, config, formatter)
    return parse_command(args, config, formatter)


def load_config(path: Optional[str]) -> SectionProxy:
    "Return the wwwauth section of the configuration, with defaults applied."
    config_parser = ConfigParser()
    config_parser.read_dict(CONFIG_DEFAULTS)
    if path:
        with open(path, encoding="utf-8") as config_file:
            config_parser.read_file(config_file)
    return config_parser["wwwauth"]


def parse_command(
    args: Namespace, config: SectionProxy, formatter: TextFormatter
) -> int:
    field_name = PROXY_AUTHENTICATE if args.proxy else WWW_AUTHENTICATE
    # field values are ISO-8859-1 on the wire
    raw_headers = []
    for value in args.values:
        try:
            raw_headers.append((field_name.encode("ascii"), value.encode("iso-8859-1")))
        except UnicodeEncodeError as why:
            formatter.error_output(
                f"{value!r} has a character that can't be sent in a header field "
                f"({value[why.start]!r} at position {why.start})"
            )
            return 2
    notes = NoteList()
    processor = HeaderProcessor(notes.add)
    _, parsed_headers = processor.process(raw_headers)
    return show_challenges(
        parsed_headers.get(field_name.lower(), []), notes, args, config, formatter
    )


def fetch_command(
    args: Namespace, config: SectionProxy, formatter: TextFormatter
) -> int:
    fetcher = ChallengeFetcher(config)

    @thor.events.on(fetcher)
    def fetch_done() -> None:
        thor.stop()

    fetcher.check(args.url)
    if not fetcher.fetch_done:
        thor.run()

    if fetcher.fetch_error is not None:
        formatter.error_output(fetcher.fetch_error.desc)
        return 1
    status = (
        f"{(fetcher.status_code or b'').decode('ascii', 'replace')} "
        f"{(fetcher.status_phrase or b'').decode('ascii', 'replace')}"
    )
    output(formatter.format_headers(status, fetcher.headers) + "\n\n")
    return show_challenges(fetcher.challenges, fetcher.notes, args, config, formatter)


def show_challenges(
    challenges: Sequence[Challenge],
    notes: NoteList,
    args: Namespace,
    config: SectionProxy,
    formatter: TextFormatter,
) -> int:
    "Output the challenges; return the exit status."
    canonical = None
    status = 0
    if args.canonical and challenges:
        try:
            canonical = formatter.format_canonical(
                challenges, config.get("default_realm", fallback="")
            )
        except ChallengeError as why:
            formatter.error_output(f"can't serialise challenges: {why}")
            status = 1
    formatter.challenge_output(challenges, notes, canonical)
    if not challenges or any(note.level == levels.BAD for note in notes):
        status = 1
    return status


def output(out: str) -> None:
    sys.stdout.write(out)


if __name__ == "__main__":
    sys.exit(main())
