# cookiejars

Read the cookies that web browsers keep on disk, and write them out in the
Netscape `cookies.txt` format that curl and wget read.

Supported cookie stores:

| browser | file | module |
| --- | --- | --- |
| ELinks | `~/.elinks/cookies` | `cookiejars.elinks` |
| w3m | `~/.w3m/cookie` | `cookiejars.w3m` |
| Konqueror | `kcookiejar/cookies` (Latin-1 text) | `cookiejars.konqueror` |
| Epiphany / GNOME Web | `cookies.sqlite` | `cookiejars.epiphany` |
| Opera (Presto engine) | `cookies4.dat` | `cookiejars.opera` |
| Safari | `Cookies.binarycookies` | `cookiejars.safari` |

The package has no third-party dependencies; Epiphany databases are read with
the standard `sqlite3` module, opened read-only.

## Installation

```
pip install cookiejars
```

## Command line

```
cookiejars
```

This looks for every cookie store on the machine, reads each one and prints one
line per cookie in aligned columns: browser, profile, container, file, domain,
name, value and expiry (in local time, `YYYY.MM.DD HH:MM:SS`). Long file
names, domains, names and values are cut to 45 characters and end with `…`.
Control characters in values are shown escaped. Stores that cannot be read are
skipped without a message.

By default expired cookies are left out.

| option | meaning |
| --- | --- |
| `-b`, `--browser NAME` | only stores of this browser (`elinks`, `w3m`, `konqueror`, `epiphany`, `opera`, `safari`) |
| `-p`, `--profile NAME` | only stores of this profile |
| `-q`, `--default-profile` | only default profiles |
| `-e`, `--expired` | include expired cookies |
| `-d`, `--domain TEXT` | cookie domain contains TEXT |
| `-n`, `--name NAME` | cookie name equals NAME |
| `-o`, `--export FILE` | write the cookies in Netscape format to FILE instead of the table (`-` for stdout) |

```
cookiejars -b w3m -d example.com -o cookies.txt
```

The export file is created if needed and written from its start; an existing
file is not truncated first. The command exits with status 1 if the export
file cannot be opened, and 0 otherwise.

## Library

### Reading one file

Each browser module provides `read_cookies(filename, *filters)`, which returns
a list of `Cookie` objects, and `cookie_store(filename)`, which returns a store
that is also a context manager:

```python
from cookiejars import w3m
from cookiejars.cookie import valid, domain_contains

for cookie in w3m.read_cookies("/home/me/.w3m/cookie", valid, domain_contains("example.com")):
    print(cookie.name, cookie.value, cookie.expires)
```

```python
from cookiejars import safari

with safari.cookie_store("Cookies.binarycookies") as store:
    cookies = store.read_cookies()
```

The store classes are `ElinksCookieStore`, `W3mCookieStore`,
`KonquerorCookieStore`, `EpiphanyCookieStore`, `OperaPrestoCookieStore` and
`SafariCookieStore`. Each has `filename`, `browser`, `profile`, `os_name` and
`is_default_profile` fields and `open()`, `close()` and `read_cookies(*filters)`
methods. The text-file stores share the base class
`cookiejars.store.CookieStore`.

How each reader treats bad input:

- ELinks, w3m and Konqueror skip lines they cannot parse.
- Safari raises `ValueError` for a malformed file.
- Opera raises `ValueError` for a missing header or an unsupported format
  version, and stops quietly when the data ends early.
  `opera.cookie_store` raises `ValueError` for a file that is not a
  `cookies4.dat` file, including the SQLite database of newer Opera versions.
- Epiphany raises `ValueError` when a row holds a value of an unexpected type.

Lower-level parsers are available too: `konqueror.parse_line(line)`,
`opera.parse_cookies4(stream)`, `safari.parse_binarycookies(stream)` and
`safari.from_safari_time(seconds)`.

### Cookies and filters

`cookiejars.cookie.Cookie` is a dataclass with `name`, `value`, `domain`,
`path`, `expires`, `creation`, `secure`, `http_only` and `container`. Times are
timezone-aware UTC `datetime` values, or `None` where the store does not record
them.

Filters are plain callables that take a `Cookie` and return a bool.
`cookiejars.cookie` provides:

- `valid` — the cookie has an expiry that lies in the future
- `domain(value)` — the domain equals `value`
- `domain_contains(substring)` — the domain contains `substring`
- `name(value)` — the name equals `value`
- `filter_cookie(cookie, *filters)` and `filter_cookies(cookies, *filters)`,
  which apply them

### Finding stores

```python
from cookiejars.finders import find_all_cookie_stores

for store in find_all_cookie_stores():
    with store:
        print(store.browser, store.filename, len(store.read_cookies()))
```

The stores returned are the places each browser keeps its cookies; the files
need not exist. Which finders are registered depends on the platform:

- `find_elinks`, `find_w3m`: Linux and the BSDs
- `find_konqueror`, `find_epiphany`: everywhere except Windows
- `find_opera`: everywhere (Presto `cookies4.dat` only)
- `find_safari`: macOS and Windows

`konqueror_roots()`, `epiphany_roots()`, `opera_presto_roots()` and
`safari_cookie_file()` return the locations searched; they honour
`XDG_DATA_HOME` and, on Windows, `%AppData%`. Further finders can be added with
`register_finder(name, finder)`, where `finder` is a callable returning a list
of stores. Finders that raise `OSError`, `RuntimeError` or `ValueError` are
skipped by `find_all_cookie_stores()`.

### Exporting

```python
import sys
from cookiejars.export import export_cookies

export_cookies(sys.stdout, cookies)
```

`export_cookies` accepts `cookiejars.cookie.Cookie` objects and
`http.cookiejar.Cookie` objects, skips `None` entries, and writes nothing at
all when there is no cookie. HttpOnly cookies get the `#HttpOnly_` domain
prefix. `netscape_bool(value)` renders `TRUE` or `FALSE`.

## What it does not do

- It does not read Chrome, Chromium, Edge, Brave, Firefox or Internet
  Explorer cookie stores, nor the SQLite cookie database of newer Opera
  versions.
- It does not read Netscape `cookies.txt` files; it only writes them.
- It does not decrypt encrypted cookie values.
- It never writes to a browser's cookie files, and it offers no cookie jar for
  HTTP clients.