"""Reader for the SQLite cookie database kept by Epiphany (GNOME Web)."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional

from .cookie import Cookie, Filter, filter_cookie

# Epiphany started on a Gecko backend and later moved to WebKit; the table
# keeps the Mozilla name but is read here without relying on the Firefox layout.
_QUERY = (
    "SELECT name, value, host, path, expiry, isSecure, isHttpOnly "
    "FROM moz_cookies"
)


def _unix_time(seconds: int) -> datetime:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        limit = datetime.max if seconds > 0 else datetime.min
        return limit.replace(tzinfo=timezone.utc)


def _text(value: Any, column: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    raise ValueError(
        f"got unexpected value for {column} {value!r} (type {type(value).__name__})"
    )


def _integer(value: Any, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(
            f"got unexpected value for {label} {value!r} (type {type(value).__name__})"
        )
    return value


def _row_to_cookie(row: tuple) -> Cookie:
    cookie_name, value, host, path, expiry, is_secure, is_http_only = row
    return Cookie(
        name=_text(cookie_name, "name"),
        value=_text(value, "value"),
        domain=_text(host, "host"),
        path=_text(path, "path"),
        expires=_unix_time(_integer(expiry, "Expires")),
        secure=_integer(is_secure, "Secure") > 0,
        http_only=_integer(is_http_only, "HttpOnly") > 0,
    )


@dataclass
class EpiphanyCookieStore:
    """Cookie store for Epiphany's ``cookies.sqlite`` database."""

    filename: str = ""
    browser: str = "epiphany"
    profile: str = ""
    os_name: str = ""
    is_default_profile: bool = False
    database: Optional[sqlite3.Connection] = field(
        default=None, repr=False, compare=False
    )

    def open(self) -> None:
        """Open the database read-only; do nothing if it is already open."""
        if self.database is not None:
            return
        uri = Path(self.filename).resolve().as_uri() + "?mode=ro"
        self.database = sqlite3.connect(uri, uri=True)

    def close(self) -> None:
        """Close the database if it is open."""
        if self.database is None:
            return
        self.database.close()
        self.database = None

    def read_cookies(self, *filters: Filter) -> List[Cookie]:
        """Read the cookies that pass the filters.

        Raises ``ValueError`` when a row holds a value of an unexpected type.
        """
        self.open()
        if self.database is None:
            raise ValueError("database is not open")
        cookies = []
        for row in self.database.execute(_QUERY):
            cookie = _row_to_cookie(row)
            if filter_cookie(cookie, *filters):
                cookies.append(cookie)
        return cookies

    def __enter__(self) -> "EpiphanyCookieStore":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def cookie_store(filename: str) -> EpiphanyCookieStore:
    """Return a store for the given database; close it after use."""
    return EpiphanyCookieStore(filename=filename, browser="epiphany")


def read_cookies(filename: str, *filters: Filter) -> List[Cookie]:
    """Read the cookies from an Epiphany cookie database."""
    with cookie_store(filename) as store:
        return store.read_cookies(*filters)