"""``help`` — list commands or show one command's usage."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mojito.app import Application


class HelpCommand:
    description = "Display help for commands"
    usage = """[COMMAND]

ARGUMENTS
  COMMAND                          Display help for the given command
"""

    def __init__(self, app: Application) -> None:
        self.app = app

    def run(self, args: list[str]) -> None:
        from mojito.commands import program_name

        prog = program_name()
        if not args:
            print(f"Usage: {prog} COMMAND [OPTIONS]\n")
            print("Commands:")
            for name in sorted(self.app.commands):
                print(f" {name:<10}- {self.app.commands[name].description}")
            return

        name = args[0]
        command = self.app.commands.get(name)
        if command is None:
            print(f"Command not found: {name}", file=sys.stderr)
            raise SystemExit(1)
        print(f"Usage: {prog} {name} {command.usage}")
