"""HTTP response.

Handlers mutate the response in place: set ``code``, add headers,
replace or append to the content. ``json()`` and ``text()`` are the
content-negotiation shortcuts.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Protocol

from mojito.http.asset import new_asset
from mojito.http.message import Message


class ResponseWriter(Protocol):
    """Where a finished response goes when it is written synchronously."""

    def write_head(self, code: int, headers: list[tuple[str, str]]) -> None: ...
    def write(self, data: bytes) -> Any: ...


@dataclass(slots=True)
class BufferWriter:
    """In-memory ``ResponseWriter`` — records what would go on the wire."""

    code: int = 0
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytearray = field(default_factory=bytearray)

    def write_head(self, code: int, headers: list[tuple[str, str]]) -> None:
        self.code = code
        self.headers = list(headers)

    def write(self, data: bytes) -> int:
        self.body.extend(data)
        return len(data)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")


@dataclass(slots=True)
class Response(Message):
    """An outgoing HTTP response.

    ``code`` 0 means "not set yet"; the application turns it into 200
    at the end of the request.
    """

    code: int = 0
    status: str = ""
    writer: ResponseWriter | None = field(default=None, repr=False, compare=False)

    @property
    def reason(self) -> str:
        """Status text: ``status`` if set, else the standard phrase."""
        if self.status:
            return self.status
        try:
            return HTTPStatus(self.code).phrase
        except ValueError:
            return ""

    def json(self, data: Any) -> None:
        """Replace the content with *data* encoded as JSON."""
        encoded = json_module.dumps(data, separators=(",", ":"), ensure_ascii=False)
        self.content = new_asset(encoded)
        self.headers["Content-Type"] = "application/json"

    def text(self, value: str) -> None:
        """Replace the content with plain text."""
        self.content = new_asset(value)
        self.headers["Content-Type"] = "text/plain"

    def html(self, value: str) -> None:
        """Replace the content with an HTML document or fragment."""
        self.content = new_asset(value)
        self.headers["Content-Type"] = "text/html; charset=utf-8"

    def write(self, writer: ResponseWriter | None = None) -> None:
        """Send status, headers and content to *writer* (default: ``self.writer``)."""
        target = writer or self.writer
        if target is None:
            msg = "Response has no writer attached"
            raise RuntimeError(msg)
        target.write_head(self.code, self.headers.pairs())
        self.content.serve(target.write)
