"""Reader for the tab-separated cookie file written by ELinks."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import BinaryIO, Iterator, List, Optional

from .cookie import Cookie, Filter
from .store import CookieStore

_INTEGER = re.compile(r"[+-]?[0-9]+")
_FIELD_COUNT = 8


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
    fields = line.split("\t")
    if len(fields) != _FIELD_COUNT:
        return None
    expires = _parse_int(fields[5])
    if expires is None:
        return None
    secure = _parse_int(fields[6])
    if secure is None:
        return None
    return Cookie(
        name=fields[0],
        value=fields[1],
        path=fields[3],
        domain=fields[4],
        expires=_unix_time(expires),
        secure=secure == 1,
    )


@dataclass
class ElinksCookieStore(CookieStore):
    """Cookie store for the ELinks ``cookies`` file."""

    browser: str = "elinks"

    def read_cookies(self, *filters: Filter) -> List[Cookie]:
        """Read the cookies that pass the filters; malformed lines are skipped."""
        return super().read_cookies(*filters)

    def _iter_cookies(self, stream: BinaryIO) -> Iterator[Cookie]:
        for line in self._text_lines(stream):
            cookie = _parse_line(line)
            if cookie is not None:
                yield cookie


def cookie_store(filename: str) -> ElinksCookieStore:
    """Return a store for the given file; close it after use."""
    return ElinksCookieStore(filename=filename, browser="elinks")


def read_cookies(filename: str, *filters: Filter) -> List[Cookie]:
    """Read the cookies from an ELinks cookie file."""
    with cookie_store(filename) as store:
        return store.read_cookies(*filters)