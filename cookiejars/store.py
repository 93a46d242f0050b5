"""File-backed cookie store base class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import BinaryIO, Iterator, List, Optional

from .cookie import Cookie, Filter, filter_cookies


@dataclass
class CookieStore(ABC):
    """A cookie store backed by a single file.

    Subclasses implement ``_iter_cookies`` to parse the opened file.
    """

    filename: str = ""
    browser: str = ""
    profile: str = ""
    os_name: str = ""
    is_default_profile: bool = False
    file: Optional[BinaryIO] = field(default=None, repr=False, compare=False)

    def open(self) -> None:
        """Open the file, or rewind it if it is already open."""
        if self.file is not None:
            self.file.seek(0)
            return
        if not self.filename:
            return
        self.file = open(self.filename, "rb")

    def close(self) -> None:
        """Close the file if it is open."""
        if self.file is not None:
            try:
                self.file.close()
            finally:
                self.file = None

    def read_cookies(self, *filters: Filter) -> List[Cookie]:
        """Read all cookies from the file that pass the given filters."""
        self.open()
        if self.file is None:
            raise ValueError("cookie store has no file to read")
        return filter_cookies(self._iter_cookies(self.file), *filters)

    @abstractmethod
    def _iter_cookies(self, stream: BinaryIO) -> Iterator[Cookie]:
        """Yield the cookies stored in ``stream``."""

    def _text_lines(self, stream: BinaryIO, encoding: str = "utf-8") -> Iterator[str]:
        for raw in stream:
            line = raw.decode(encoding, errors="replace")
            if line.endswith("\n"):
                line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
            yield line

    def __enter__(self) -> "CookieStore":
        return self

    def __exit__(self, *args) -> None:
        self.close()