"""Synchronous application tester.

Runs requests through the request boundary without ASGI or threads,
and offers chainable assertions on the last response::

    t = Tester(app)
    t.get_ok("/").status_is(200).text_is("Hello, World!")
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from mojito.app import Application
from mojito.context import Context
from mojito.http.request import Request
from mojito.http.response import BufferWriter, Response
from mojito.server.handler import run_handler
from mojito.stash import Stash


def new_context(
    request: Request | None = None,
    *,
    app: Application | None = None,
    stash: Mapping[str, Any] | None = None,
) -> Context:
    """A context for unit tests. Defaults to ``GET /`` without an application."""
    req = request if request is not None else Request.new("GET", "/")
    base = Stash(path=req.path)
    if stash:
        base.merge(stash)
    return Context(app, req, Response(), base)


class Tester:
    __test__ = False  # Tell pytest this is not a test class
    """Drive an Application synchronously and assert on the result.

    Every ``*_ok`` method runs the request, checks that the application
    produced a response and stores it as ``res``. Assertion methods
    raise ``AssertionError`` and return the tester for chaining.
    """

    __slots__ = ("app", "context", "res", "writer")

    def __init__(self, app: Application) -> None:
        self.app = app
        self.context: Context | None = None
        self.res: Response | None = None
        self.writer: BufferWriter | None = None

    # -- Requests --

    def request_ok(
        self,
        method: str,
        target: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | bytes = b"",
    ) -> Tester:
        self.writer = BufferWriter()
        c = self.app.build_context(
            Request.new(method, target, headers=headers, body=body),
            Response(writer=self.writer),
        )
        self.context = c
        self.res = run_handler(self.app, c)
        if self.writer.code == 0:
            raise AssertionError(f"{method} {target}: no response was written")
        return self

    def get_ok(self, target: str, *, headers: Mapping[str, str] | None = None) -> Tester:
        return self.request_ok("GET", target, headers=headers)

    def post_ok(
        self,
        target: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | bytes = b"",
    ) -> Tester:
        return self.request_ok("POST", target, headers=headers, body=body)

    def put_ok(
        self,
        target: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | bytes = b"",
    ) -> Tester:
        return self.request_ok("PUT", target, headers=headers, body=body)

    def delete_ok(self, target: str, *, headers: Mapping[str, str] | None = None) -> Tester:
        return self.request_ok("DELETE", target, headers=headers)

    # -- Assertions --

    def _written(self) -> BufferWriter:
        if self.writer is None:
            raise AssertionError("No request has been made")
        return self.writer

    def status_is(self, code: int) -> Tester:
        got = self._written().code
        if got != code:
            raise AssertionError(f"Status is {got}, expected {code}")
        return self

    def text_is(self, text: str) -> Tester:
        got = self._written().text
        if got != text:
            raise AssertionError(f"Content is {got!r}, expected {text!r}")
        return self

    def content_like(self, pattern: str | re.Pattern[str]) -> Tester:
        got = self._written().text
        if re.search(pattern, got) is None:
            raise AssertionError(f"Content {got!r} does not match {pattern!r}")
        return self

    def header_is(self, name: str, value: str) -> Tester:
        if self.res is None:
            raise AssertionError("No request has been made")
        got = self.res.headers.header(name)
        if got != value:
            raise AssertionError(f"Header {name} is {got!r}, expected {value!r}")
        return self
