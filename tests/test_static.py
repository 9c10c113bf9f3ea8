"""Tests for mojito.static — file serving, caching headers and ranges."""

import os
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from mojito.http.headers import http_date
from mojito.http.request import Request
from mojito.static import Static, md5_sum
from mojito.testing import new_context

MTIME = datetime(2015, 10, 21, 7, 28, tzinfo=UTC)


def _write(directory: Path, name: str, content: str, mtime: datetime = MTIME) -> Path:
    path = directory / name
    path.write_text(content)
    os.utime(path, (mtime.timestamp(), mtime.timestamp()))
    return path


def _get(target: str, headers: dict[str, str] | None = None, method: str = "GET"):
    return new_context(Request.new(method, target, headers=headers))


@pytest.fixture
def public(tmp_path: Path) -> Path:
    _write(tmp_path, "hello.txt", "Hello, World")
    return tmp_path


class TestServe:
    def test_file(self, public: Path) -> None:
        c = _get("/hello.txt")
        assert Static([public]).dispatch(c)
        assert c.res.code == 200
        assert str(c.res.content) == "Hello, World"
        assert c.res.headers.content_type == "text/plain;charset=UTF-8"

    def test_caching_headers(self, public: Path) -> None:
        c = _get("/hello.txt")
        Static([public]).dispatch(c)
        assert c.res.headers.last_modified() == MTIME
        assert c.res.headers.etag() == md5_sum(http_date(MTIME))
        assert c.res.headers.header("ETag").startswith('"')

    def test_cache_control(self, public: Path) -> None:
        c = _get("/hello.txt")
        Static([public], cache_control="public, max-age=60").dispatch(c)
        assert c.res.headers.header("Cache-Control") == "public, max-age=60"

    def test_head(self, public: Path) -> None:
        c = _get("/hello.txt", method="HEAD")
        assert Static([public]).dispatch(c)
        assert c.res.code == 200

    def test_other_methods_fall_through(self, public: Path) -> None:
        assert not Static([public]).dispatch(_get("/hello.txt", method="POST"))

    def test_missing(self, public: Path) -> None:
        assert not Static([public]).dispatch(_get("/nope.txt"))

    def test_root_is_not_served(self, public: Path) -> None:
        assert not Static([public]).dispatch(_get("/"))

    def test_directory_is_not_served(self, public: Path) -> None:
        (public / "sub").mkdir()
        assert not Static([public]).dispatch(_get("/sub"))

    def test_file_as_directory(self, public: Path) -> None:
        assert not Static([public]).dispatch(_get("/hello.txt/more"))

    def test_traversal_refused(self, tmp_path: Path) -> None:
        root = tmp_path / "public"
        root.mkdir()
        _write(tmp_path, "secret.txt", "secret")
        assert not Static([root]).dispatch(_get("/../secret.txt"))

    def test_unknown_extension(self, tmp_path: Path) -> None:
        _write(tmp_path, "blob.qqq", "?")
        c = _get("/blob.qqq")
        Static([tmp_path]).dispatch(c)
        assert c.res.headers.content_type == "application/octet-stream"


class TestPaths:
    def test_first_source_wins(self, tmp_path: Path) -> None:
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        _write(first, "hello.txt", "Hello, Gophers")
        _write(second, "hello.txt", "Hello, World")
        _write(second, "robots.txt", "Allow: *")
        static = Static([first, second])

        c = _get("/hello.txt")
        assert static.dispatch(c)
        assert str(c.res.content) == "Hello, Gophers"

        c = _get("/robots.txt")
        assert static.dispatch(c)
        assert str(c.res.content) == "Allow: *"

    def test_in_memory_source(self) -> None:
        started = datetime(2020, 1, 1, tzinfo=UTC)
        static = Static([{"robots.txt": b"User-agent: *"}], started=started)
        c = _get("/robots.txt")
        assert static.dispatch(c)
        assert str(c.res.content) == "User-agent: *"
        assert c.res.headers.last_modified() == started

    def test_add_path(self, public: Path) -> None:
        static = Static()
        assert not static.dispatch(_get("/hello.txt"))
        static.add_path(str(public))
        assert static.dispatch(_get("/hello.txt"))


class TestRange:
    def test_partial(self, public: Path) -> None:
        c = _get("/hello.txt", {"Range": "bytes=0-4"})
        assert Static([public]).dispatch(c)
        assert c.res.code == 206
        assert str(c.res.content) == "Hello"
        assert c.res.headers.header("Content-Range") == "bytes 0-4/12"

    def test_open_end(self, public: Path) -> None:
        c = _get("/hello.txt", {"Range": "bytes=7-"})
        Static([public]).dispatch(c)
        assert str(c.res.content) == "World"
        assert c.res.headers.header("Content-Range") == "bytes 7-11/12"

    def test_not_satisfiable(self, public: Path) -> None:
        c = _get("/hello.txt", {"Range": "bytes=50-60"})
        assert Static([public]).dispatch(c)
        assert c.res.code == 416
        assert c.res.headers.header("Content-Range") == "bytes */12"
        assert str(c.res.content) == ""

    def test_reversed_range(self) -> None:
        c = _get("/a.txt", {"Range": "bytes=5-2"})
        assert Static([{"a.txt": b"0123456789"}]).dispatch(c)
        assert c.res.code == 416
        assert c.res.headers.header("Content-Range") == "bytes */10"
        assert str(c.res.content) == ""

    def test_malformed_range_serves_everything(self, public: Path) -> None:
        c = _get("/hello.txt", {"Range": "lines=1-2"})
        Static([public]).dispatch(c)
        assert c.res.code == 200
        assert str(c.res.content) == "Hello, World"


class TestConditional:
    def test_if_modified_since(self, tmp_path: Path) -> None:
        now = datetime.now(UTC).replace(microsecond=0)
        _write(tmp_path, "old.txt", "Old", now - timedelta(hours=1))
        _write(tmp_path, "new.txt", "New", now)
        static = Static([tmp_path])

        c = _get("/old.txt", {"If-Modified-Since": http_date(now)})
        assert static.dispatch(c)
        assert c.res.code == 304
        assert str(c.res.content) == ""

        c = _get("/new.txt", {"If-Modified-Since": http_date(now)})
        assert static.dispatch(c)
        assert c.res.code == 200
        assert str(c.res.content) == "New"

    def test_if_none_match(self, tmp_path: Path) -> None:
        now = datetime.now(UTC).replace(microsecond=0)
        old = now - timedelta(hours=1)
        etag = md5_sum(http_date(old))
        _write(tmp_path, "old.txt", "Old", old)
        _write(tmp_path, "new.txt", "New", now)
        static = Static([tmp_path])

        c = _get("/old.txt", {"If-None-Match": f'"{etag}"'})
        assert static.dispatch(c)
        assert c.res.code == 304
        assert str(c.res.content) == ""

        c = _get("/new.txt", {"If-None-Match": f'"{etag}"'})
        assert static.dispatch(c)
        assert c.res.code == 200
        assert str(c.res.content) == "New"


class TestMd5Sum:
    def test_unpadded_base32(self) -> None:
        value = md5_sum("hello")
        assert len(value) == 26
        assert "=" not in value
        assert value == value.upper()
