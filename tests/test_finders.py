import os
import sys

import pytest

from cookiejars import finders
from cookiejars.elinks import ElinksCookieStore


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    return str(tmp_path)


def test_find_elinks(home):
    stores = finders.find_elinks()
    assert len(stores) == 1
    assert stores[0].filename == os.path.join(home, ".elinks", "cookies")
    assert stores[0].browser == "elinks"
    assert stores[0].is_default_profile


def test_find_w3m(home):
    stores = finders.find_w3m()
    assert [s.filename for s in stores] == [os.path.join(home, ".w3m", "cookie")]
    assert stores[0].browser == "w3m"
    assert stores[0].is_default_profile


def test_konqueror_roots_with_xdg(home, tmp_path, monkeypatch):
    xdg = str(tmp_path / "xdg")
    monkeypatch.setenv("XDG_DATA_HOME", xdg)
    assert finders.konqueror_roots() == [os.path.join(home, ".local", "share"), xdg]


def test_find_konqueror_last_is_default(home, tmp_path, monkeypatch):
    xdg = str(tmp_path / "xdg")
    monkeypatch.setenv("XDG_DATA_HOME", xdg)
    stores = finders.find_konqueror()
    assert [s.is_default_profile for s in stores] == [False, True]
    assert stores[1].filename == os.path.join(xdg, "kcookiejar", "cookies")


def test_epiphany_roots_without_xdg(home, monkeypatch):
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)
    assert finders.epiphany_roots() == [
        os.path.join(home, ".var", "app", "org.gnome.Epiphany", "data", "epiphany"),
        os.path.join(home, ".local", "share", "epiphany"),
    ]


def test_find_epiphany(home, monkeypatch):
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)
    stores = finders.find_epiphany()
    assert len(stores) == 2
    assert stores[-1].is_default_profile and not stores[0].is_default_profile
    assert all(s.filename.endswith("cookies.sqlite") for s in stores)
    assert all(s.browser == "epiphany" for s in stores)


def test_opera_presto_roots_unix(home, monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    assert finders.opera_presto_roots() == [os.path.join(home, ".opera")]


def test_opera_presto_roots_darwin(home, monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    assert finders.opera_presto_roots() == [os.path.join(home, "Library", "Opera")]


def test_opera_presto_roots_windows(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    monkeypatch.setenv("AppData", str(tmp_path))
    assert finders.opera_presto_roots() == [os.path.join(str(tmp_path), "Opera", "Opera")]


def test_opera_presto_roots_windows_without_appdata(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    monkeypatch.delenv("AppData", raising=False)
    monkeypatch.delenv("APPDATA", raising=False)
    with pytest.raises(OSError):
        finders.opera_presto_roots()


def test_find_opera(home, monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    stores = finders.find_opera()
    assert [s.filename for s in stores] == [os.path.join(home, ".opera", "cookies4.dat")]
    assert stores[0].browser == "opera"


def test_safari_cookie_file_darwin(home, monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    assert finders.safari_cookie_file() == os.path.join(
        home, "Library", "Cookies", "Cookies.binarycookies"
    )


def test_safari_cookie_file_unsupported(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    with pytest.raises(OSError):
        finders.safari_cookie_file()


def test_find_safari_windows(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    monkeypatch.setenv("AppData", str(tmp_path))
    stores = finders.find_safari()
    assert stores[0].filename == os.path.join(
        str(tmp_path), "Apple Computer", "Safari", "Cookies", "Cookies.binarycookies"
    )
    assert stores[0].is_default_profile


def test_find_all_includes_registered_and_skips_failures(tmp_path):
    store = ElinksCookieStore(filename=str(tmp_path / "c"), browser="finder-test")

    def broken():
        raise OSError("boom")

    finders.register_finder("finder-test-broken", broken)
    finders.register_finder("finder-test", lambda: [store])
    stores = finders.find_all_cookie_stores()
    assert any(s is store for s in stores)