import io
import struct
from datetime import datetime, timezone

import pytest

from cookiejars.cookie import domain, filter_cookies, name
from cookiejars.safari import (
    SafariCookieStore,
    cookie_store,
    from_safari_time,
    parse_binarycookies,
    read_cookies,
)

EPOCH = datetime(2001, 1, 1, tzinfo=timezone.utc)
HEADER = struct.Struct("<iiiiiiii8sdd")


def safari_seconds(moment):
    return (moment - EPOCH).total_seconds()


def cookie_record(url, cookie_name, path, value, flags, expiry, creation):
    strings = b""
    offsets = []
    for text in (url, cookie_name, path, value):
        offsets.append(HEADER.size + len(strings))
        strings += text.encode() + b"\x00"
    size = HEADER.size + len(strings)
    header = HEADER.pack(size, 0, flags, 0, *offsets, b"\x00" * 8, expiry, creation)
    return header + strings


def page(records):
    count = len(records)
    start = 8 + 4 * count + 4
    offsets = []
    body = b""
    for record in records:
        offsets.append(start + len(body))
        body += record
    return (
        b"\x00\x00\x01\x00"
        + struct.pack("<i", count)
        + b"".join(struct.pack("<i", o) for o in offsets)
        + b"\x00\x00\x00\x00"
        + body
    )


def binary_file(pages, checksum=b"\x00" * 8):
    return (
        b"cook"
        + struct.pack(">i", len(pages))
        + b"".join(struct.pack(">i", len(p)) for p in pages)
        + b"".join(pages)
        + checksum
    )


WANT_EXPIRES = datetime(2038, 1, 17, 19, 14, 7, tzinfo=timezone.utc)
WANT_CREATION = datetime(2017, 12, 16, 23, 23, 19, tzinfo=timezone.utc)


def sample_file():
    return binary_file(
        [
            page(
                [
                    cookie_record(
                        "example.com", "other", "/", "secret", 0,
                        safari_seconds(WANT_EXPIRES), safari_seconds(WANT_CREATION),
                    ),
                    cookie_record(
                        "news.ycombinator.com", "user", "/", "token", 5,
                        safari_seconds(WANT_EXPIRES), safari_seconds(WANT_CREATION),
                    ),
                ]
            ),
            page(
                [
                    cookie_record(
                        "example.org", "third", "/path", "placeholder", 1,
                        safari_seconds(WANT_EXPIRES), safari_seconds(WANT_CREATION),
                    )
                ]
            ),
        ]
    )


def test_read_cookies_from_file(tmp_path):
    path = tmp_path / "Cookies.binarycookies"
    path.write_bytes(sample_file())
    cookies = read_cookies(str(path))
    cookies = filter_cookies(cookies, domain("news.ycombinator.com"), name("user"))
    assert len(cookies) == 1
    cookie = cookies[0]
    assert cookie.value == "token"
    assert cookie.expires == WANT_EXPIRES
    assert cookie.creation == WANT_CREATION


def test_all_pages_are_read_in_order():
    cookies = parse_binarycookies(io.BytesIO(sample_file()))
    assert [c.name for c in cookies] == ["other", "user", "third"]
    assert cookies[2].path == "/path"
    assert cookies[2].domain == "example.org"


def test_flags():
    cookies = parse_binarycookies(io.BytesIO(sample_file()))
    assert (cookies[0].secure, cookies[0].http_only) == (False, False)
    assert (cookies[1].secure, cookies[1].http_only) == (True, True)
    assert (cookies[2].secure, cookies[2].http_only) == (True, False)


def test_filters_in_read_cookies(tmp_path):
    path = tmp_path / "Cookies.binarycookies"
    path.write_bytes(sample_file())
    cookies = read_cookies(str(path), name("third"))
    assert [c.value for c in cookies] == ["placeholder"]


def test_from_safari_time_epoch():
    assert from_safari_time(0) == datetime(2001, 1, 1, tzinfo=timezone.utc)


def test_from_safari_time_round_trip():
    assert from_safari_time(safari_seconds(WANT_CREATION)) == WANT_CREATION


def test_bad_magic_raises():
    data = b"nope" + sample_file()[4:]
    with pytest.raises(ValueError, match="cook"):
        parse_binarycookies(io.BytesIO(data))


def test_short_header_raises():
    with pytest.raises(ValueError, match="error reading header"):
        parse_binarycookies(io.BytesIO(b"co"))


def test_bad_page_header_raises():
    bad_page = b"\x01\x02\x03\x04" + page([])[4:]
    with pytest.raises(ValueError, match="error reading page 0"):
        parse_binarycookies(io.BytesIO(binary_file([bad_page])))


def test_missing_checksum_raises():
    data = sample_file()[:-8]
    with pytest.raises(ValueError, match="checksum"):
        parse_binarycookies(io.BytesIO(data))


def test_unterminated_string_raises():
    record = cookie_record("example.com", "n", "/", "token", 0, 0.0, 0.0)[:-1]
    with pytest.raises(ValueError, match="cookie 0"):
        parse_binarycookies(io.BytesIO(binary_file([page([record])])))


def test_empty_file_has_no_cookies():
    assert parse_binarycookies(io.BytesIO(binary_file([]))) == []


def test_store_closes_file(tmp_path):
    path = tmp_path / "Cookies.binarycookies"
    path.write_bytes(sample_file())
    with cookie_store(str(path)) as store:
        assert len(store.read_cookies()) == 3
        assert store.file is not None
    assert store.file is None
    assert isinstance(store, SafariCookieStore)
    assert store.browser == "safari"