"""HTTP request.

Unlike a frozen request object, a mojito request is mutable: hooks may
rewrite the method, path, headers or parameters before routing.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

from mojito._internal.asgi import Scope
from mojito.http.asset import new_asset
from mojito.http.headers import Headers
from mojito.http.message import Message
from mojito.http.params import Parameters

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(slots=True)
class Request(Message):
    """An incoming HTTP request.

    ``params`` combines query and body parameters; when a name appears
    in both, the body values win.
    """

    method: str = "GET"
    path: str = "/"
    query_string: str = ""
    http_version: str = "1.1"
    client: tuple[str, int] | None = None
    query_params: Parameters = field(default_factory=Parameters)
    body_params: Parameters = field(default_factory=Parameters)

    @property
    def url(self) -> str:
        """Path plus query string."""
        if self.query_string:
            return f"{self.path}?{self.query_string}"
        return self.path

    @property
    def params(self) -> Parameters:
        combined = self.query_params.copy()
        combined.update_lists(self.body_params)
        return combined  # type: ignore[return-value]

    def param(self, name: str) -> str:
        """First value of *name* (body before query), or ``""``."""
        if name in self.body_params:
            return self.body_params.param(name)
        return self.query_params.param(name)

    def every_param(self, name: str) -> list[str]:
        if name in self.body_params:
            return self.body_params.every_param(name)
        return self.query_params.every_param(name)

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.content.read() or b"null")

    # -- Factories --

    @classmethod
    def new(
        cls,
        method: str,
        target: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | bytes = b"",
    ) -> Request:
        """Build a request from a method and a request-target (``/path?query``)."""
        parts = urlsplit(target)
        request = cls(
            method=method,
            path=parts.path or "/",
            query_string=parts.query,
            headers=Headers(headers),
            content=new_asset(body),
            query_params=Parameters.parse(parts.query),
        )
        request.body_params = _parse_body_params(request)
        return request

    @classmethod
    def from_asgi(cls, scope: Scope, body: bytes = b"") -> Request:
        """Create a Request from an ASGI HTTP scope and the full body."""
        query_string = scope.get("query_string", b"").decode("latin-1")
        client = scope.get("client")
        request = cls(
            method=scope["method"],
            path=scope["path"],
            query_string=query_string,
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            headers=Headers.from_raw(scope.get("headers", ())),
            content=new_asset(body),
            query_params=Parameters.parse(query_string),
        )
        request.body_params = _parse_body_params(request)
        return request


def _parse_body_params(request: Request) -> Parameters:
    content_type = request.headers.content_type.split(";", 1)[0].strip().lower()
    if content_type != FORM_CONTENT_TYPE:
        return Parameters()
    return Parameters.parse(request.content.read().decode("utf-8", errors="replace"))
