"""Locate browser cookie files on the local machine."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List

from .elinks import ElinksCookieStore
from .epiphany import EpiphanyCookieStore
from .konqueror import KonquerorCookieStore
from .opera import OperaPrestoCookieStore
from .safari import SafariCookieStore
from .w3m import W3mCookieStore

Finder = Callable[[], List[Any]]

_FINDERS: Dict[str, Finder] = {}

_UNIX_PREFIXES = ("linux", "freebsd", "openbsd", "netbsd", "dragonfly", "sunos")


def register_finder(name: str, finder: Finder) -> None:
    """Register a callable that returns the cookie stores of one browser."""
    _FINDERS[name] = finder


def find_all_cookie_stores() -> List[Any]:
    """Return the stores of every registered finder; failing finders are skipped."""
    stores: List[Any] = []
    for finder in list(_FINDERS.values()):
        try:
            stores.extend(finder())
        except (OSError, RuntimeError, ValueError):
            continue
    return stores


def _home() -> str:
    return str(Path.home())


def _is_unix_like() -> bool:
    return sys.platform.startswith(_UNIX_PREFIXES)


def _app_data(allow_empty: bool) -> str:
    value = os.environ.get("AppData")
    if value is None or (not allow_empty and not value):
        raise OSError("%AppData% not set")
    return value


def find_elinks() -> List[ElinksCookieStore]:
    """Return the ELinks cookie store in the home directory."""
    return [
        ElinksCookieStore(
            filename=os.path.join(_home(), ".elinks", "cookies"),
            browser="elinks",
            is_default_profile=True,
        )
    ]


def find_w3m() -> List[W3mCookieStore]:
    """Return the w3m cookie store in the home directory."""
    return [
        W3mCookieStore(
            filename=os.path.join(_home(), ".w3m", "cookie"),
            browser="w3m",
            is_default_profile=True,
        )
    ]


def konqueror_roots() -> List[str]:
    """Return the data directories that may hold Konqueror's cookie jar."""
    roots: List[str] = []
    try:
        roots.append(os.path.join(_home(), ".local", "share"))
    except RuntimeError:
        pass
    if "XDG_DATA_HOME" in os.environ:
        roots.append(os.environ["XDG_DATA_HOME"])
    return roots


def find_konqueror() -> List[KonquerorCookieStore]:
    """Return Konqueror stores; the last root is the default profile."""
    roots = konqueror_roots()
    last = len(roots) - 1
    return [
        KonquerorCookieStore(
            filename=os.path.join(root, "kcookiejar", "cookies"),
            browser="konqueror",
            is_default_profile=index == last,
        )
        for index, root in enumerate(roots)
    ]


def epiphany_roots() -> List[str]:
    """Return the directories that may hold Epiphany's cookie database."""
    roots: List[str] = []
    try:
        home = _home()
    except RuntimeError:
        home = None
    if home is not None:
        roots.append(os.path.join(home, ".var", "app", "org.gnome.Epiphany", "data", "epiphany"))
        roots.append(os.path.join(home, ".local", "share", "epiphany"))
    if "XDG_DATA_HOME" in os.environ:
        roots.append(os.path.join(os.environ["XDG_DATA_HOME"], "epiphany"))
    return roots


def find_epiphany() -> List[EpiphanyCookieStore]:
    """Return Epiphany stores; the last root is the default profile."""
    roots = epiphany_roots()
    last = len(roots) - 1
    return [
        EpiphanyCookieStore(
            filename=os.path.join(root, "cookies.sqlite"),
            browser="epiphany",
            is_default_profile=index == last,
        )
        for index, root in enumerate(roots)
    ]


def opera_presto_roots() -> List[str]:
    """Return the profile directories of Opera's Presto engine."""
    if sys.platform == "darwin":
        return [os.path.join(_home(), "Library", "Opera")]
    if sys.platform == "win32":
        return [os.path.join(_app_data(allow_empty=True), "Opera", "Opera")]
    return [os.path.join(_home(), ".opera")]


def find_opera() -> List[OperaPrestoCookieStore]:
    """Return the Opera Presto ``cookies4.dat`` stores."""
    return [
        OperaPrestoCookieStore(
            filename=os.path.join(root, "cookies4.dat"),
            browser="opera",
            is_default_profile=True,
        )
        for root in opera_presto_roots()
    ]


def safari_cookie_file() -> str:
    """Return the path of Safari's cookie file on this platform."""
    if sys.platform == "darwin":
        return os.path.join(_home(), "Library", "Cookies", "Cookies.binarycookies")
    if sys.platform == "win32":
        return os.path.join(
            _app_data(allow_empty=False),
            "Apple Computer",
            "Safari",
            "Cookies",
            "Cookies.binarycookies",
        )
    raise OSError(f"no Safari cookie file location on {sys.platform}")


def find_safari() -> List[SafariCookieStore]:
    """Return the Safari cookie store."""
    return [
        SafariCookieStore(
            filename=safari_cookie_file(),
            browser="safari",
            is_default_profile=True,
        )
    ]


def _register_defaults() -> None:
    if _is_unix_like():
        register_finder("elinks", find_elinks)
        register_finder("w3m", find_w3m)
    if sys.platform != "win32":
        register_finder("konqueror", find_konqueror)
    if sys.platform not in ("win32", "android", "ios"):
        register_finder("epiphany", find_epiphany)
    register_finder("opera", find_opera)
    if sys.platform in ("darwin", "win32"):
        register_finder("safari", find_safari)


_register_defaults()