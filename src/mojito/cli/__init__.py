"""Mojito CLI — run an application's commands.

Entry point registered as ``mojito`` in ``pyproject.toml``::

    [project.scripts]
    mojito = "mojito.cli:main"

Usage::

    mojito myapp:app daemon -l http://*:8080
    mojito myapp help
"""

import argparse
import sys

from mojito.cli._resolve import resolve_app


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``mojito`` command."""
    parser = argparse.ArgumentParser(
        prog="mojito",
        description="Mojito — run a command of a mojito application.",
    )
    parser.add_argument("app", help="Import string (e.g. myapp:app)")
    parser.add_argument("command", nargs=argparse.REMAINDER, help="Command and its arguments")
    args = parser.parse_args(argv)

    # Make "mojito myapp ..." work from the project directory
    if "" not in sys.path:
        sys.path.insert(0, "")

    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    app.start(args.command)
