"""Reader for the kcookiejar file used by Konqueror."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import BinaryIO, Iterator, List, Optional, Tuple

from .cookie import Cookie, Filter
from .store import CookieStore

_INTEGER = re.compile(r"[+-]?[0-9]+")

_SECURE = 1
_HTTP_ONLY = 2


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


def _word(text: str) -> Optional[Tuple[str, str]]:
    head, sep, rest = text.lstrip(" ").partition(" ")
    if not sep:
        return None
    return head, rest


def _quoted(text: str) -> Optional[Tuple[str, str]]:
    parts = text.lstrip(" ").split('"', 2)
    if len(parts) != 3 or parts[0]:
        return None
    return parts[1], parts[2]


def parse_line(line: str) -> Optional[Cookie]:
    """Parse one kcookiejar line; return None for comments, headers and bad lines.

    Fields: host "domain" "path" expires protocol name flags value.
    """
    if not line or line[0] in "#[":
        return None

    host, sep, rest = line.partition(" ")
    if not sep:
        return None

    quoted = _quoted(rest)
    if quoted is None:
        return None
    cookie_domain, rest = quoted
    # An empty domain field means the cookie is not for subdomains.
    cookie_domain = cookie_domain or host

    quoted = _quoted(rest)
    if quoted is None:
        return None
    path, rest = quoted

    word = _word(rest)
    if word is None:
        return None
    expires = _parse_int(word[0])
    if expires is None:
        return None

    word = _word(word[1])
    if word is None or _parse_int(word[0]) is None:
        return None

    word = _word(word[1])
    if word is None:
        return None
    cookie_name, rest = word

    word = _word(rest)
    if word is None:
        return None
    flags = _parse_int(word[0])
    if flags is None:
        return None

    return Cookie(
        name=cookie_name,
        value=word[1].strip(" "),
        domain=cookie_domain,
        path=path,
        expires=_unix_time(expires),
        secure=bool(flags & _SECURE),
        http_only=bool(flags & _HTTP_ONLY),
    )


@dataclass
class KonquerorCookieStore(CookieStore):
    """Cookie store for the Konqueror ``kcookiejar/cookies`` file."""

    browser: str = "konqueror"

    def read_cookies(self, *filters: Filter) -> List[Cookie]:
        """Read the cookies that pass the filters; the file is Latin-1 text."""
        return super().read_cookies(*filters)

    def _iter_cookies(self, stream: BinaryIO) -> Iterator[Cookie]:
        for line in self._text_lines(stream, encoding="latin-1"):
            cookie = parse_line(line)
            if cookie is not None:
                yield cookie


def cookie_store(filename: str) -> KonquerorCookieStore:
    """Return a store for the given file; close it after use."""
    return KonquerorCookieStore(filename=filename, browser="konqueror")


def read_cookies(filename: str, *filters: Filter) -> List[Cookie]:
    """Read the cookies from a Konqueror cookie file."""
    with cookie_store(filename) as store:
        return store.read_cookies(*filters)