"""ASGI response sending — translates a mojito Response to ASGI messages.

The body is streamed from the response asset in chunks, so static files
are never read into memory whole.
"""

import logging

from mojito._internal.asgi import Send
from mojito.http.response import Response

logger = logging.getLogger("mojito.server")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(
    response: Response,
    send: Send,
    *,
    head: bool = False,
    default_content_type: str = "text/html; charset=utf-8",
) -> None:
    """Translate a mojito Response into ASGI send() calls.

    For HEAD requests the headers describe the full body but none is sent.
    """
    status = response.code or 200
    allowed = _body_allowed(status)
    length = response.content.length if allowed else 0

    raw_headers: list[tuple[bytes, bytes]] = []
    if allowed and length and not response.headers.exists("Content-Type"):
        raw_headers.append((b"content-type", default_content_type.encode("latin-1")))
    for name, value in response.headers.pairs():
        if name == "Content-Length":
            continue
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))
    if allowed:
        raw_headers.append((b"content-length", str(length).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": raw_headers,
        }
    )

    if allowed and not head:
        for chunk in response.content.chunks():
            await send({"type": "http.response.body", "body": chunk, "more_body": True})
    await send({"type": "http.response.body", "body": b""})
