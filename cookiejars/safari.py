"""Reader for Safari's ``Cookies.binarycookies`` files."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import BinaryIO, Iterator, List

from .cookie import Cookie, Filter
from .store import CookieStore

_FILE_MAGIC = b"cook"
_PAGE_MAGIC = b"\x00\x00\x01\x00"
_COOKIE_HEADER = struct.Struct("<iiiiiiii8sdd")
_CHECKSUM_SIZE = 8
_SECURE = 1
_HTTP_ONLY = 4
_SAFARI_EPOCH = datetime(2001, 1, 1, tzinfo=timezone.utc)


def from_safari_time(seconds: float) -> datetime:
    """Convert seconds since 2001-01-01 UTC into an aware datetime."""
    try:
        return _SAFARI_EPOCH + timedelta(seconds=seconds)
    except (OverflowError, ValueError):
        limit = datetime.max if seconds > 0 else datetime.min
        return limit.replace(tzinfo=timezone.utc)


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise ValueError("unexpected end of data")
    return data


def _read_string(page: bytes, field_name: str, start: int, offset: int) -> str:
    position = start + offset
    if position < 0:
        raise ValueError(f"seeking for {field_name!r} at offset {offset}")
    end = page.find(b"\x00", position)
    if end < 0:
        raise ValueError(f"reading for {field_name!r} at offset {offset}")
    return page[position:end].decode("utf-8", errors="replace")


def _read_cookie(page: bytes, start: int) -> Cookie:
    if start < 0 or start + _COOKIE_HEADER.size > len(page):
        raise ValueError("unexpected end of data")
    (
        _size,
        _unknown1,
        flags,
        _unknown2,
        url_offset,
        name_offset,
        path_offset,
        value_offset,
        _end,
        expiration,
        creation,
    ) = _COOKIE_HEADER.unpack_from(page, start)
    return Cookie(
        domain=_read_string(page, "url", start, url_offset),
        name=_read_string(page, "name", start, name_offset),
        path=_read_string(page, "path", start, path_offset),
        value=_read_string(page, "value", start, value_offset),
        expires=from_safari_time(expiration),
        creation=from_safari_time(creation),
        secure=bool(flags & _SECURE),
        http_only=bool(flags & _HTTP_ONLY),
    )


def _read_page(stream: BinaryIO, size: int) -> List[Cookie]:
    if size < 0:
        raise ValueError(f"negative page size {size}")
    page = _read_exact(stream, size)
    if len(page) < 8:
        raise ValueError("error reading header: unexpected end of data")
    if page[:4] != _PAGE_MAGIC:
        raise ValueError(
            f"expected first 4 bytes of page to be {_PAGE_MAGIC!r}; got {page[:4]!r}"
        )
    (count,) = struct.unpack_from("<i", page, 4)
    if count < 0 or 8 + 4 * count > len(page):
        raise ValueError("error reading cookie offsets: unexpected end of data")
    offsets = struct.unpack_from(f"<{count}i", page, 8)
    cookies = []
    for index, offset in enumerate(offsets):
        try:
            cookies.append(_read_cookie(page, offset))
        except ValueError as exc:
            raise ValueError(f"cookie {index}: {exc}") from exc
    return cookies


def parse_binarycookies(stream: BinaryIO) -> List[Cookie]:
    """Parse a binarycookies stream; raise ``ValueError`` if it is malformed."""
    try:
        header = _read_exact(stream, 8)
    except ValueError as exc:
        raise ValueError(f"error reading header: {exc}") from exc
    magic = header[:4]
    if magic != _FILE_MAGIC:
        raise ValueError(f"expected first 4 bytes to be {_FILE_MAGIC!r}; got {magic!r}")
    (num_pages,) = struct.unpack(">i", header[4:])
    if num_pages < 0:
        raise ValueError(f"negative page count {num_pages}")

    try:
        sizes = struct.unpack(f">{num_pages}i", _read_exact(stream, 4 * num_pages))
    except ValueError as exc:
        raise ValueError(f"error reading page sizes: {exc}") from exc

    cookies: List[Cookie] = []
    for index, size in enumerate(sizes):
        try:
            cookies.extend(_read_page(stream, size))
        except ValueError as exc:
            raise ValueError(f"error reading page {index}: {exc}") from exc

    try:
        _read_exact(stream, _CHECKSUM_SIZE)
    except ValueError as exc:
        raise ValueError(f"error reading checksum: {exc}") from exc
    return cookies


@dataclass
class SafariCookieStore(CookieStore):
    """Cookie store for Safari's ``Cookies.binarycookies`` file."""

    browser: str = "safari"

    def read_cookies(self, *filters: Filter) -> List[Cookie]:
        """Read the cookies that pass the filters; a malformed file raises."""
        return super().read_cookies(*filters)

    def _iter_cookies(self, stream: BinaryIO) -> Iterator[Cookie]:
        yield from parse_binarycookies(stream)


def cookie_store(filename: str) -> SafariCookieStore:
    """Return a store for the given file; close it after use."""
    return SafariCookieStore(filename=filename, browser="safari")


def read_cookies(filename: str, *filters: Filter) -> List[Cookie]:
    """Read the cookies from a Safari binarycookies file."""
    with cookie_store(filename) as store:
        return store.read_cookies(*filters)