"""Command line tool listing or exporting the cookies of local browsers."""

from __future__ import annotations

import argparse
import os
import sqlite3
import sys
from datetime import datetime
from typing import List, Optional, Sequence, TextIO

from .cookie import Cookie, domain_contains, name, valid
from .export import export_cookies
from .finders import find_all_cookie_stores

TRIM_LENGTH = 45
_TIME_FORMAT = "%Y.%m.%d %H:%M:%S"
_ZERO_TIME = "0001.01.01 00:00:00"
_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def trim_str(text: str, length: int) -> str:
    """Shorten ``text`` to ``length`` characters, ending with an ellipsis."""
    if len(text) <= length:
        return text
    if length < 0:
        raise ValueError("length must not be negative")
    if length > 0:
        return text[: length - 1] + "\u2026"
    return ""


def _quote(value: str) -> str:
    parts = ['"']
    for char in value:
        if char in _ESCAPES:
            parts.append(_ESCAPES[char])
        elif char.isprintable():
            parts.append(char)
        elif ord(char) < 0x80:
            parts.append(f"\\x{ord(char):02x}")
        elif ord(char) < 0x10000:
            parts.append(f"\\u{ord(char):04x}")
        else:
            parts.append(f"\\U{ord(char):08x}")
    parts.append('"')
    return "".join(parts)


def _format_time(moment: Optional[datetime]) -> str:
    if moment is None:
        return _ZERO_TIME
    if moment.tzinfo is not None:
        try:
            moment = moment.astimezone()
        except (OverflowError, OSError, ValueError):
            pass
    return moment.strftime(_TIME_FORMAT)


def _write_table(out: TextIO, rows: List[List[str]]) -> None:
    if not rows:
        return
    columns = len(rows[0]) - 1
    widths = [max(len(row[i]) for row in rows) + 1 for i in range(columns)]
    for row in rows:
        cells = [cell.ljust(width) for cell, width in zip(row, widths)]
        out.write("".join(cells) + row[-1] + "\n")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cookiejars")
    parser.add_argument("-b", "--browser", default="", help="browser filter")
    parser.add_argument("-p", "--profile", default="", help="profile filter")
    parser.add_argument(
        "-q", "--default-profile", action="store_true", help="only default profile(s)"
    )
    parser.add_argument("-e", "--expired", action="store_true", help="show expired cookies")
    parser.add_argument("-d", "--domain", default="", help="cookie domain filter (partial)")
    parser.add_argument("-n", "--name", default="", help="cookie name filter (exact)")
    parser.add_argument(
        "-o", "--export", default="", help="export cookies in netscape format"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command; return the exit status."""
    args = _parser().parse_args(argv)

    export_stream: Optional[TextIO] = None
    owned_stream = False
    if args.export:
        if args.export == "-":
            export_stream = sys.stdout
        else:
            try:
                fd = os.open(args.export, os.O_RDWR | os.O_CREAT, 0o644)
            except OSError as exc:
                print(exc, file=sys.stderr)
                return 1
            export_stream = os.fdopen(fd, "w", encoding="utf-8", newline="")
            owned_stream = True

    filters = []
    if not args.expired:
        filters.append(valid)
    if args.domain:
        filters.append(domain_contains(args.domain))
    if args.name:
        filters.append(name(args.name))

    exported: List[Cookie] = []
    rows: List[List[str]] = []
    try:
        for store in find_all_cookie_stores():
            try:
                if args.browser and store.browser != args.browser:
                    continue
                if args.profile and store.profile != args.profile:
                    continue
                if args.default_profile and not store.is_default_profile:
                    continue
                try:
                    cookies = store.read_cookies(*filters)
                except (OSError, ValueError, sqlite3.Error):
                    cookies = []
            finally:
                store.close()

            if export_stream is not None:
                exported.extend(cookies)
                continue
            for cookie in cookies:
                container = f" [{cookie.container}]" if cookie.container else ""
                rows.append(
                    [
                        store.browser,
                        store.profile,
                        container,
                        trim_str(store.filename, TRIM_LENGTH),
                        trim_str(cookie.domain, TRIM_LENGTH),
                        trim_str(cookie.name, TRIM_LENGTH),
                        trim_str(_quote(cookie.value).strip('"'), TRIM_LENGTH),
                        _format_time(cookie.expires),
                    ]
                )

        if export_stream is not None:
            export_cookies(export_stream, exported)
        else:
            _write_table(sys.stdout, rows)
    finally:
        if owned_stream and export_stream is not None:
            export_stream.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())