"""``daemon`` — start the web application server."""

from __future__ import annotations

import argparse
import logging
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from mojito.errors import ConfigurationError

if TYPE_CHECKING:
    from mojito.app import Application

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def parse_listen(listen: str, default_port: int = 3000) -> tuple[str, int]:
    """Split a listen location such as ``http://*:3000`` into host and port.

    ``*`` (or an empty host) means every interface.
    """
    if "://" not in listen:
        listen = f"http://{listen}"
    parts = urlsplit(listen)
    if parts.scheme != "http":
        msg = f"Unsupported listen scheme {parts.scheme!r} in {listen!r}"
        raise ConfigurationError(msg)
    try:
        port = parts.port
    except ValueError as exc:
        msg = f"Invalid port in listen location {listen!r}"
        raise ConfigurationError(msg) from exc
    host = parts.hostname or "*"
    if host == "*":
        host = "0.0.0.0"
    return host, port if port is not None else default_port


class DaemonCommand:
    description = "Start the web application server"
    usage = """[OPTIONS]

OPTIONS
  -l, --listen <location>          The host/port to listen on. Defaults to
                                   "http://HOST:PORT" from the app config
"""

    def __init__(self, app: Application) -> None:
        self.app = app

    def run(self, args: list[str]) -> None:
        from mojito.commands import program_name

        config = self.app.config
        parser = argparse.ArgumentParser(prog=f"{program_name()} daemon", description=self.description)
        parser.add_argument(
            "-l",
            "--listen",
            default=f"http://{config.host}:{config.port}",
            help='Location to listen on, e.g. "http://*:3000"',
        )
        options = parser.parse_args(args)
        host, port = parse_listen(options.listen, default_port=config.port)

        logging.basicConfig(level=config.log_level.upper(), format=LOG_FORMAT)

        from mojito.server.dev import run_server

        run_server(self.app, host, port, reload=config.debug)
