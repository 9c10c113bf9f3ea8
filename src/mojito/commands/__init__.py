"""Application commands — ``help``, ``version`` and ``daemon``.

Run with ``app.start()`` (or the ``mojito`` console script)::

    python myapp.py daemon -l http://*:8080
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, Protocol

from mojito.commands.daemon import DaemonCommand
from mojito.commands.help import HelpCommand
from mojito.commands.version import VersionCommand

if TYPE_CHECKING:
    from mojito.app import Application


class Command(Protocol):
    """A named action the application can run from the command line."""

    @property
    def description(self) -> str: ...
    @property
    def usage(self) -> str: ...
    def run(self, args: list[str]) -> None: ...


def default_commands(app: Application) -> dict[str, Command]:
    return {
        "daemon": DaemonCommand(app),
        "help": HelpCommand(app),
        "version": VersionCommand(app),
    }


def program_name() -> str:
    """Basename of the running program, for usage lines."""
    return os.path.basename(sys.argv[0]) or "mojito"


__all__ = ["Command", "DaemonCommand", "HelpCommand", "VersionCommand", "default_commands"]
