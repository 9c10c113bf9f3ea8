"""Error handling at the request boundary.

Maps HTTPError exceptions and unexpected failures to responses. The
response a handler had started building is discarded.
"""

import logging
import traceback

from mojito.context import Context
from mojito.errors import HTTPError
from mojito.http.response import Response

logger = logging.getLogger("mojito.server")


def _fresh_response(c: Context) -> Response:
    c.res = Response(writer=c.res.writer)
    c.rendered = True
    return c.res


def handle_http_error(exc: HTTPError, c: Context) -> Response:
    """Turn an HTTPError raised by a handler into a response with its status."""
    logger.debug("%d %s %s — %s", exc.status, c.req.method, c.req.path, exc.detail)
    res = _fresh_response(c)
    res.code = exc.status
    res.text(exc.detail or f"Error {exc.status}")
    for name, value in exc.headers:
        res.headers.add(name, value)
    return res


def handle_internal_error(exc: Exception, c: Context, *, debug: bool) -> Response:
    """Log an unexpected failure and answer 500.

    Must be called from inside the ``except`` block so the traceback is logged.
    """
    logger.exception("500 %s %s", c.req.method, c.req.path)
    res = _fresh_response(c)
    res.code = 500
    if debug:
        res.text("".join(traceback.format_exception(exc)))
    else:
        res.text("Internal Server Error")
    return res
