"""Serve an application with pounce.

Pounce's ``run()`` takes an import string, but the daemon command holds
a live Application object, so ``pounce.Server`` is used directly with
the ASGI callable.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("mojito.server")


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
) -> None:
    """Start a single-worker pounce server for *app*.

    Args:
        app: ASGI callable (mojito Application instance).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on file changes (development).
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
    )
    logger.info("Listening on http://%s:%d", host, port)
    Server(config, app).run()
