from datetime import datetime, timezone

import pytest

from cookiejars import elinks
from cookiejars.cookie import name


def _local(*parts):
    return datetime(*parts).astimezone()


def _write(tmp_path, lines):
    path = tmp_path / "cookies"
    path.write_bytes(("\n".join(lines) + "\n").encode("utf-8"))
    return str(path)


@pytest.fixture
def cookie_file(tmp_path):
    expires = int(_local(2021, 4, 16, 12, 0, 45).timestamp())
    return _write(
        tmp_path,
        [f"NID\t204=blabla\tgoogle.de\t/\tgoogle.de\t{expires}\t0\t0"],
    )


def test_read_cookies_matches_source_case(cookie_file):
    cookies = elinks.read_cookies(cookie_file)
    assert len(cookies) == 1
    c = cookies[0]
    assert c.domain == "google.de"
    assert c.name == "NID"
    assert c.path == "/"
    assert c.expires == _local(2021, 4, 16, 12, 0, 45)
    assert c.secure is False
    assert c.value == "204=blabla"


def test_secure_flag_and_epoch(tmp_path):
    path = _write(tmp_path, ["a\tb\thost\t/p\thost\t0\t1\t0"])
    (c,) = elinks.read_cookies(path)
    assert c.secure is True
    assert c.path == "/p"
    assert c.expires == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_malformed_lines_are_skipped(tmp_path):
    path = _write(
        tmp_path,
        [
            "too\tfew\tfields",
            "a\tb\thost\t/\thost\tnotanumber\t0\t0",
            "a\tb\thost\t/\thost\t5\tx\t0",
            "ok\tv\thost\t/\thost\t5\t0\t0",
            "a\tb\thost\t/\thost\t5\t0\t0\textra",
        ],
    )
    cookies = elinks.read_cookies(path)
    assert [c.name for c in cookies] == ["ok"]


def test_filters_apply(tmp_path):
    path = _write(
        tmp_path,
        ["one\tv\th\t/\th\t5\t0\t0", "two\tv\th\t/\th\t5\t0\t0"],
    )
    cookies = elinks.read_cookies(path, name("two"))
    assert [c.name for c in cookies] == ["two"]


def test_cookie_store_properties_and_close(cookie_file):
    store = elinks.cookie_store(cookie_file)
    assert store.browser == "elinks"
    assert store.filename == cookie_file
    with store:
        assert len(store.read_cookies()) == 1
        assert len(store.read_cookies()) == 1
    assert store.file is None


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        elinks.read_cookies(str(tmp_path / "absent"))