"""Export cookies in the Netscape cookies.txt format used by curl and wget."""

from __future__ import annotations

import math
from http.cookiejar import Cookie as JarCookie
from typing import Iterable, NamedTuple, Optional, TextIO, Union

from .cookie import Cookie

HTTP_ONLY_PREFIX = "#HttpOnly_"
HEADER = "# HTTP Cookie File\n\n"

AnyCookie = Union[Cookie, JarCookie]


class _Fields(NamedTuple):
    domain: str
    path: str
    name: str
    value: str
    http_only: bool
    secure: bool
    expires: int


def netscape_bool(value: object) -> str:
    """Render a truth value as ``TRUE`` or ``FALSE``."""
    return str(bool(value)).upper()


def _fields(cookie: AnyCookie) -> _Fields:
    if isinstance(cookie, JarCookie):
        expires = int(cookie.expires) if cookie.expires is not None else 0
        return _Fields(
            domain=cookie.domain,
            path=cookie.path,
            name=cookie.name,
            value=cookie.value or "",
            http_only=cookie.has_nonstandard_attr("HttpOnly"),
            secure=bool(cookie.secure),
            expires=expires,
        )
    expires_at = cookie.expires
    expires = math.floor(expires_at.timestamp()) if expires_at is not None else 0
    return _Fields(
        domain=cookie.domain,
        path=cookie.path,
        name=cookie.name,
        value=cookie.value,
        http_only=cookie.http_only,
        secure=cookie.secure,
        expires=expires,
    )


def _line(cookie: AnyCookie) -> str:
    fields = _fields(cookie)
    shown_domain = (HTTP_ONLY_PREFIX if fields.http_only else "") + fields.domain
    return "\t".join(
        [
            shown_domain,
            netscape_bool(fields.domain.startswith(".")),
            fields.path,
            netscape_bool(fields.secure),
            str(fields.expires),
            fields.name,
            fields.value,
        ]
    ) + "\n"


def export_cookies(stream: TextIO, cookies: Iterable[Optional[AnyCookie]]) -> None:
    """Write the cookies to ``stream``; ``None`` entries are skipped.

    Nothing, not even the header, is written when there is no cookie.
    """
    present = [cookie for cookie in cookies if cookie is not None]
    if not present:
        return
    stream.write(HEADER)
    for cookie in present:
        stream.write(_line(cookie))