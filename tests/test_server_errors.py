"""Tests for mojito.server.handler.run_handler — the request boundary."""

import logging

import pytest

from mojito.app import Application
from mojito.context import Context
from mojito.errors import HTTPError
from mojito.http.request import Request
from mojito.http.response import BufferWriter, Response
from mojito.server.handler import run_handler
from mojito.static import Static
from mojito.templating import KidaRenderer


def _app(**config) -> Application:
    app = Application(renderer=KidaRenderer(), static=Static())

    @app.routes.get("/boom")
    def boom(c: Context) -> None:
        c.res.text("partial output")
        raise RuntimeError("boom")

    @app.routes.get("/gone")
    def gone(c: Context) -> None:
        raise HTTPError(410)

    @app.routes.get("/ok")
    def ok(c: Context) -> None:
        c.res.text("ok")

    return app


def _context(app: Application, target: str, writer: BufferWriter | None = None) -> Context:
    return app.build_context(Request.new("GET", target), Response(writer=writer))


class TestRunHandler:
    def test_success(self) -> None:
        app = _app()
        c = _context(app, "/ok")
        response = run_handler(app, c)
        assert response is c.res
        assert response.code == 200

    def test_exception_becomes_500(self, caplog: pytest.LogCaptureFixture) -> None:
        app = _app()
        with caplog.at_level(logging.ERROR, logger="mojito.server"):
            response = run_handler(app, _context(app, "/boom"))
        assert response.code == 500
        assert response.body == "Internal Server Error"
        assert "500 GET /boom" in caplog.text

    def test_partial_output_is_discarded(self) -> None:
        app = _app()
        response = run_handler(app, _context(app, "/boom"))
        assert "partial output" not in response.body

    def test_http_error_without_detail(self) -> None:
        app = _app()
        response = run_handler(app, _context(app, "/gone"))
        assert response.code == 410
        assert response.body == "Error 410"

    def test_error_response_is_written(self) -> None:
        app = _app()
        writer = BufferWriter()
        run_handler(app, _context(app, "/boom", writer))
        assert writer.code == 500
        assert writer.text == "Internal Server Error"

    def test_not_found_is_not_an_error(self, caplog: pytest.LogCaptureFixture) -> None:
        app = _app()
        with caplog.at_level(logging.DEBUG, logger="mojito"):
            response = run_handler(app, _context(app, "/nowhere"))
        assert response.code == 404
        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
