"""Reader for the ``cookies4.dat`` file kept by Opera's Presto engine."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import BinaryIO, Iterator, List, Optional, Tuple

from .cookie import Cookie, Filter
from .store import CookieStore

_HEADER = struct.Struct(">IIHH")
_NO_LENGTH_BIT = 0x80
_SQLITE_MAGIC = b"SQLite format 3\x00"

# Record tags used while walking the file.
_TAG_DOMAIN_START = 0x01
_TAG_PATH_START = 0x02
_TAG_COOKIE = 0x03
_TAG_DOMAIN_END = 0x04
_TAG_PATH_END = 0x05
_TAG_COOKIE_NAME = 0x10
_TAG_COOKIE_VALUE = 0x11
_TAG_COOKIE_EXPIRY = 0x12
_TAG_COOKIE_HTTPS_ONLY = 0x19
_TAG_PATH_NAME = 0x1D
_TAG_DOMAIN_NAME = 0x1E

# These records wrap nested records instead of carrying a payload of their own.
_STRUCT_TAGS = frozenset({_TAG_DOMAIN_START, _TAG_PATH_START, _TAG_COOKIE})


def _unix_time(seconds: int) -> datetime:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        limit = datetime.max if seconds > 0 else datetime.min
        return limit.replace(tzinfo=timezone.utc)


def _read_header(stream: BinaryIO) -> Tuple[int, int]:
    data = stream.read(_HEADER.size)
    if len(data) < _HEADER.size:
        raise ValueError("error reading header: unexpected end of data")
    version, _app_version, id_length, length_length = _HEADER.unpack(data)
    major, minor = version >> 12, version & 0xFFF
    if major != 1 or minor != 0:
        raise ValueError(f"unsupported file format version {major}.{minor}")
    if not (1 <= id_length <= 4 and 1 <= length_length <= 4):
        raise ValueError("unexpected byte length values")
    return id_length, length_length


def _read_record(
    stream: BinaryIO, id_length: int, length_length: int
) -> Optional[Tuple[int, int]]:
    """Return ``(tag, payload_length)``, or None at the end of the data."""
    tag_bytes = stream.read(id_length)
    if len(tag_bytes) < id_length:
        return None
    first = tag_bytes[0]
    if first & _NO_LENGTH_BIT:
        tag = int.from_bytes(bytes([first & 0x7F]) + tag_bytes[1:], "big")
        return tag, 0
    length_bytes = stream.read(length_length)
    if len(length_bytes) < length_length:
        return None
    return int.from_bytes(tag_bytes, "big"), int.from_bytes(length_bytes, "big")


def parse_cookies4(stream: BinaryIO) -> List[Cookie]:
    """Parse a ``cookies4.dat`` stream.

    Raises ``ValueError`` for a missing header, an unsupported format version
    or unusable field sizes. Parsing stops quietly at the end of the data.
    """
    id_length, length_length = _read_header(stream)

    cookies: List[Cookie] = []
    domain_parts: List[str] = []
    path = ""

    while True:
        record = _read_record(stream, id_length, length_length)
        if record is None:
            break
        tag, length = record

        payload = b""
        if length > 0 and tag not in _STRUCT_TAGS:
            payload = stream.read(length)
            if len(payload) < length:
                break
        text = payload.decode("utf-8", errors="replace")

        if tag == _TAG_COOKIE:
            cookies.append(Cookie(domain=".".join(reversed(domain_parts)), path=path))
        elif tag == _TAG_DOMAIN_NAME:
            domain_parts.append(text)
        elif tag == _TAG_DOMAIN_END:
            if domain_parts:
                domain_parts.pop()
        elif tag == _TAG_PATH_NAME:
            path = text
        elif tag in (_TAG_PATH_START, _TAG_PATH_END):
            path = ""
        elif tag == _TAG_COOKIE_NAME:
            if cookies:
                cookies[-1].name = text
        elif tag == _TAG_COOKIE_VALUE:
            if cookies:
                cookies[-1].value = text
        elif tag == _TAG_COOKIE_EXPIRY:
            if len(payload) != 8:
                break
            if len(cookies) > 1:
                (seconds,) = struct.unpack(">q", payload)
                cookies[-1].expires = _unix_time(seconds)
        elif tag == _TAG_COOKIE_HTTPS_ONLY:
            if len(cookies) > 1:
                cookies[-1].secure = True

    return cookies


@dataclass
class OperaPrestoCookieStore(CookieStore):
    """Cookie store for Opera Presto's ``cookies4.dat`` file."""

    browser: str = "opera"

    def read_cookies(self, *filters: Filter) -> List[Cookie]:
        """Read the cookies that pass the filters; a bad header raises."""
        return super().read_cookies(*filters)

    def _iter_cookies(self, stream: BinaryIO) -> Iterator[Cookie]:
        yield from parse_cookies4(stream)


def _is_presto_file(head: bytes) -> bool:
    if len(head) < _HEADER.size:
        return False
    version, _app_version, _id_length, _length_length = _HEADER.unpack_from(head)
    return version == 0x1000


def cookie_store(filename: str) -> OperaPrestoCookieStore:
    """Return a store for the given file; close it after use.

    Raises ``ValueError`` when the file is not a ``cookies4.dat`` file.
    """
    with open(filename, "rb") as stream:
        head = stream.read(len(_SQLITE_MAGIC))
    if _is_presto_file(head):
        return OperaPrestoCookieStore(filename=filename, browser="opera")
    if head.startswith(_SQLITE_MAGIC):
        raise ValueError("unsupported file type: sqlite cookie database")
    raise ValueError("unknown file type")


def read_cookies(filename: str, *filters: Filter) -> List[Cookie]:
    """Read the cookies from an Opera ``cookies4.dat`` file."""
    with cookie_store(filename) as store:
        return store.read_cookies(*filters)