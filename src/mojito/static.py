"""Static file dispatcher.

Tried before the routes on every request. Sources are searched in order;
each is a directory on disk or an in-memory mapping of file name to
content. Supports conditional requests (``If-None-Match``,
``If-Modified-Since``) and single byte ranges.
"""

from __future__ import annotations

import base64
import hashlib
import logging
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, TypeAlias

from mojito.http.asset import Asset, FileAsset, MemoryAsset, new_asset
from mojito.http.headers import http_date
from mojito.types import content_type_for

if TYPE_CHECKING:
    from mojito.context import Context

logger = logging.getLogger("mojito.static")

Source: TypeAlias = Path | Mapping[str, bytes | str]


class StaticServer(Protocol):
    """What the application needs from a static dispatcher."""

    def dispatch(self, c: Context) -> bool:
        """Serve the request if possible. ``True`` means it was served."""
        ...


def md5_sum(text: str) -> str:
    """Unpadded base32 of the MD5 digest of *text*."""
    digest = hashlib.md5(text.encode("utf-8"), usedforsecurity=False).digest()
    return base64.b32encode(digest).decode("ascii").rstrip("=")


class Static:
    """Serve files from directories and in-memory mappings.

    Usage::

        static = Static(["public", {"robots.txt": b"User-agent: *"}])
        app = Application(static=static)

    Files in a mapping report *started* (the application start time) as
    their modification time.
    """

    __slots__ = ("cache_control", "paths", "started")

    def __init__(
        self,
        paths: Iterable[str | Path | Mapping[str, bytes | str]] = (),
        *,
        started: datetime | None = None,
        cache_control: str = "",
    ) -> None:
        self.started = started if started is not None else datetime.now(UTC)
        self.cache_control = cache_control
        self.paths: list[Source] = []
        for path in paths:
            self.add_path(path)

    def add_path(self, path: str | Path | Mapping[str, bytes | str]) -> None:
        """Append a source; earlier sources win."""
        if isinstance(path, Mapping):
            self.paths.append(path)
        else:
            self.paths.append(Path(path).resolve())

    def dispatch(self, c: Context) -> bool:
        if c.req.method not in ("GET", "HEAD"):
            return False
        return self.serve(c, c.req.path.lstrip("/"))

    def serve(self, c: Context, relative: str) -> bool:
        """Serve the file at *relative* (no leading slash) if a source has it."""
        found = self._find(relative)
        if found is None:
            return False
        asset, mtime = found

        # HTTP dates have one-second resolution
        mtime = mtime.replace(microsecond=0)
        last_modified = http_date(mtime)
        etag = md5_sum(last_modified)

        res = c.res
        res.headers["Last-Modified"] = last_modified
        res.headers["ETag"] = f'"{etag}"'
        res.headers["Accept-Ranges"] = "bytes"
        if self.cache_control:
            res.headers["Cache-Control"] = self.cache_control

        headers = c.req.headers
        if headers.exists("If-None-Match") and headers.if_none_match() == etag:
            res.code = 304
            return True
        since = headers.if_modified_since()
        if since is not None and since > mtime:
            res.code = 304
            return True

        res.headers["Content-Type"] = content_type_for(relative)
        res.content = asset

        requested = headers.range() if headers.exists("Range") else None
        if requested is None:
            res.code = 200
            return True

        start, end = requested
        size = asset.size
        if start >= size or (start < 0 and end == 0) or 0 <= end < start:
            res.code = 416
            res.headers["Content-Range"] = f"bytes */{size}"
            res.content = MemoryAsset()
            return True
        asset.set_range(start, end)
        offset, length = asset.span()
        res.code = 206
        res.headers["Content-Range"] = f"bytes {offset}-{offset + length - 1}/{size}"
        return True

    def _find(self, relative: str) -> tuple[Asset, datetime] | None:
        if not relative:
            return None
        for source in self.paths:
            if isinstance(source, Path):
                file_path = (source / relative).resolve()
                if not file_path.is_relative_to(source):
                    logger.debug("Refusing path outside %s: %r", source, relative)
                    continue
                try:
                    stat = file_path.stat()
                except (FileNotFoundError, NotADirectoryError):
                    continue
                except OSError as exc:
                    logger.warning("Could not open static file %s: %s", file_path, exc)
                    continue
                if not file_path.is_file():
                    continue
                return FileAsset(file_path), datetime.fromtimestamp(stat.st_mtime, UTC)
            content = source.get(relative)
            if content is not None:
                return new_asset(content), self.started
        return None
