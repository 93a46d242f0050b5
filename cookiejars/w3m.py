"""Reader for the cookie file written by w3m."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import BinaryIO, Iterator, List, Optional

from .cookie import Cookie, Filter
from .store import CookieStore

_INTEGER = re.compile(r"[+-]?[0-9]+")
_FIELD_COUNT = 11
_COO_SECURE = 2


def _parse_int(text: str) -> Optional[int]:
    if _INTEGER.fullmatch(text) is None:
        return None
    return int(text)


def _unix_time(seconds: int) -> datetime:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        limit = datetime.max if seconds > 0 else datetime.min
        return limit.replace(tzinfo=timezone.utc)


def _parse_line(line: str) -> Optional[Cookie]:
    # url, name, value, expires, domain, path, flags, version, ports, comment, comment url
    fields = line.split("\t")
    if len(fields) != _FIELD_COUNT:
        return None
    expires = _parse_int(fields[3])
    if expires is None:
        return None
    flags = _parse_int(fields[6])
    if flags is None:
        return None
    return Cookie(
        name=fields[1],
        value=fields[2],
        path=fields[5],
        domain=fields[4],
        expires=_unix_time(expires),
        secure=bool(flags & _COO_SECURE),
    )


@dataclass
class W3mCookieStore(CookieStore):
    """Cookie store for the w3m ``cookie`` file."""

    browser: str = "w3m"

    def read_cookies(self, *filters: Filter) -> List[Cookie]:
        """Read the cookies that pass the filters; malformed lines are skipped."""
        return super().read_cookies(*filters)

    def _iter_cookies(self, stream: BinaryIO) -> Iterator[Cookie]:
        for line in self._text_lines(stream):
            cookie = _parse_line(line)
            if cookie is not None:
                yield cookie


def cookie_store(filename: str) -> W3mCookieStore:
    """Return a store for the given file; close it after use."""
    return W3mCookieStore(filename=filename, browser="w3m")


def read_cookies(filename: str, *filters: Filter) -> List[Cookie]:
    """Read the cookies from a w3m cookie file."""
    with cookie_store(filename) as store:
        return store.read_cookies(*filters)