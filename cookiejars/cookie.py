"""The cookie record shared by every store, and the filters applied to it."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

Filter = Callable[["Cookie"], bool]


@dataclass
class Cookie:
    """A single browser cookie."""

    name: str = ""
    value: str = ""
    domain: str = ""
    path: str = ""
    expires: Optional[datetime] = None
    creation: Optional[datetime] = None
    secure: bool = False
    http_only: bool = False
    container: str = ""


def filter_cookie(cookie: Optional[Cookie], *filters: Filter) -> bool:
    """Return True if the cookie exists and passes every filter."""
    if cookie is None:
        return False
    return all(accept(cookie) for accept in filters)


def filter_cookies(cookies: Iterable[Optional[Cookie]], *filters: Filter) -> List[Cookie]:
    """Return the cookies that pass every filter, in their original order."""
    return [cookie for cookie in cookies if filter_cookie(cookie, *filters)]


def _now_matching(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return datetime.now()
    return datetime.now(timezone.utc)


def valid(cookie: Cookie) -> bool:
    """Accept cookies whose expiry lies in the future."""
    if cookie.expires is None:
        return False
    return cookie.expires > _now_matching(cookie.expires)


def domain(value: str) -> Filter:
    """Build a filter accepting cookies whose domain equals ``value``."""

    def accept(cookie: Cookie) -> bool:
        return cookie.domain == value

    return accept


def domain_contains(substring: str) -> Filter:
    """Build a filter accepting cookies whose domain contains ``substring``."""

    def accept(cookie: Cookie) -> bool:
        return substring in cookie.domain

    return accept


def name(value: str) -> Filter:
    """Build a filter accepting cookies whose name equals ``value``."""

    def accept(cookie: Cookie) -> bool:
        return cookie.name == value

    return accept