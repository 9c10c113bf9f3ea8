"""Mutable, case-insensitive HTTP headers.

Names are canonicalised on every read and write (``content-type`` is
stored as ``Content-Type``), so lookups never depend on the casing the
client used. ``add`` appends; ``__setitem__`` replaces.
"""

from __future__ import annotations

import base64
import binascii
from datetime import UTC, datetime
from email.utils import format_datetime, parsedate_to_datetime

from mojito._internal.multimap import MultiDict


def canonical_name(name: str) -> str:
    """Canonical header casing: ``x-forwarded-for`` -> ``X-Forwarded-For``."""
    return "-".join(part.capitalize() for part in name.split("-"))


def http_date(value: datetime) -> str:
    """Format *value* as an RFC 9110 HTTP date (always GMT)."""
    return format_datetime(value.astimezone(UTC), usegmt=True)


def parse_http_date(value: str) -> datetime | None:
    """Parse an HTTP date, or return ``None`` if it is malformed."""
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _unquote(value: str) -> str:
    value = value.strip()
    if value.startswith("W/"):
        value = value[2:]
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


class Headers(MultiDict):
    """Case-insensitive, multi-valued HTTP headers.

    ``header`` returns the first value or ``""``; ``every_header`` returns
    all values or an empty list. Typed accessors parse the headers the
    static file server and handlers care about.
    """

    __slots__ = ()

    def _key(self, name: str) -> str:
        return canonical_name(name)

    @classmethod
    def from_raw(cls, raw: list[tuple[bytes, bytes]] | tuple[tuple[bytes, bytes], ...]) -> Headers:
        """Build headers from ASGI byte pairs."""
        headers = cls()
        for name, value in raw:
            headers.add(name.decode("latin-1"), value.decode("latin-1"))
        return headers

    def exists(self, name: str) -> bool:
        """True if *name* is present with at least one value."""
        return name in self

    def header(self, name: str) -> str:
        """Return the first value for *name*, or ``""``."""
        return self.get(name) or ""

    def every_header(self, name: str) -> list[str]:
        """Return all values for *name*, or an empty list."""
        return self.get_list(name)

    # -- Typed accessors --

    @property
    def content_type(self) -> str:
        return self.header("Content-Type")

    def range(self) -> tuple[int, int] | None:
        """Parse a single ``Range: bytes=START-END`` header.

        Returns ``(start, end)`` with inclusive offsets; an open end is
        ``-1``. A suffix range (``bytes=-N``) returns ``(-1, N)``.
        Returns ``None`` when there is no usable range.
        """
        value = self.header("Range").strip()
        unit, _, spec = value.partition("=")
        if unit.strip().lower() != "bytes" or not spec:
            return None
        first = spec.split(",", 1)[0].strip()
        start_s, sep, end_s = first.partition("-")
        if not sep:
            return None
        try:
            start = int(start_s) if start_s else -1
            end = int(end_s) if end_s else -1
        except ValueError:
            return None
        if start == -1 and end == -1:
            return None
        return start, end

    def if_modified_since(self) -> datetime | None:
        return parse_http_date(self.header("If-Modified-Since"))

    def if_none_match(self) -> str:
        """The ``If-None-Match`` entity tag, without quotes."""
        return _unquote(self.header("If-None-Match"))

    def last_modified(self) -> datetime | None:
        return parse_http_date(self.header("Last-Modified"))

    def etag(self) -> str:
        """The ``ETag`` value, without quotes."""
        return _unquote(self.header("ETag"))

    def authorization(self) -> str:
        """Decoded ``Basic`` credentials (``user:password``), or ``""``."""
        scheme, _, credentials = self.header("Authorization").partition(" ")
        if scheme.lower() != "basic" or not credentials:
            return ""
        try:
            return base64.b64decode(credentials.strip(), validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            return ""
