"""``version`` — show the framework and Python versions."""

from __future__ import annotations

import platform
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mojito.app import Application


class VersionCommand:
    description = "Show the current mojito version"
    usage = ""

    def __init__(self, app: Application) -> None:
        self.app = app

    def run(self, args: list[str]) -> None:
        from mojito import __version__

        print(f"mojito  {__version__}")
        print(f"Python  {platform.python_version()} ({platform.python_implementation()})")
