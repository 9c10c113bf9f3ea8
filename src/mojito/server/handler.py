"""ASGI handler — translates ASGI scope/messages to mojito types.

The only component that touches raw ASGI directly. Reads the request
body, builds the Request and Context, runs the synchronous pipeline in a
worker thread through the request boundary, and sends the Response back
through ASGI send().
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import anyio.to_thread

from mojito._internal.asgi import Receive, Scope, Send
from mojito.errors import HTTPError
from mojito.http.request import Request
from mojito.http.response import Response
from mojito.server.errors import handle_http_error, handle_internal_error
from mojito.server.sender import send_response

if TYPE_CHECKING:
    from mojito.app import Application
    from mojito.context import Context

logger = logging.getLogger("mojito.server")


def run_handler(app: Application, c: Context) -> Response:
    """Run ``app.handler(c)`` and recover from anything it raises.

    An HTTPError becomes a response with its status; any other exception
    is logged and becomes a 500. Never raises.
    """
    try:
        app.handler(c)
        return c.res
    except HTTPError as exc:
        response = handle_http_error(exc, c)
    except Exception as exc:
        response = handle_internal_error(exc, c, debug=app.config.debug)

    if response.writer is not None:
        try:
            response.write()
        except Exception:
            logger.exception("Could not write error response for %s %s", c.req.method, c.req.path)
    return response


async def read_body(receive: Receive) -> bytes:
    """Collect the full request body from ASGI ``http.request`` messages."""
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        chunks.append(message.get("body", b""))
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


async def handle_request(app: Application, scope: Scope, receive: Receive, send: Send) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    body = await read_body(receive)
    request = Request.from_asgi(scope, body)
    c = app.build_context(request)

    # Handlers are synchronous; keep them off the event loop
    response = await anyio.to_thread.run_sync(run_handler, app, c)

    await send_response(
        response,
        send,
        head=request.method == "HEAD",
        default_content_type=app.config.default_content_type,
    )
