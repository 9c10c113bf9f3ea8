"""Path template compilation.

Standard placeholders start with ``:`` right after a ``/`` or ``<`` and
match every character except ``/`` and ``.``::

    "/users/:id"        -> "/users/(?P<id>[^/.]+)"
    "/hello_<:name>"    -> "/hello_(?P<name>[^/.]+)"

A placeholder whose name has a default value becomes optional, and so
does the slash right before it::

    parse_pattern("/foo/:foo", {"foo": "bar"}) -> "/foo/?(?P<foo>[^/.]*)"

Literal text is used as-is, so a template may also carry its own named
groups, e.g. ``/page/(?P<num>\\d+)``. The result has no anchors; the
route decides whether to match a prefix or the whole path.
"""

import re
from collections.abc import Mapping
from typing import Any

PLACEHOLDER = re.compile(r"(?P<lead>^|[/<]):(?P<name>[a-zA-Z_]+)(?P<trail>>|(?=/)|$)")


def placeholder_names(path: str) -> list[str]:
    """Return the placeholder names in *path*, left to right."""
    return [m.group("name") for m in PLACEHOLDER.finditer(path)]


def parse_pattern(path: str, defaults: Mapping[str, Any] | None = None) -> str:
    """Compile a path template into an unanchored regular expression string."""
    defaults = defaults or {}
    parts: list[str] = []
    last = 0
    for m in PLACEHOLDER.finditer(path):
        parts.append(path[last : m.start()])
        last = m.end()

        slash = "/" if m.group("lead") == "/" else ""
        name = m.group("name")
        quantifier = "+"
        if name in defaults:
            quantifier = "*"
            if slash:
                slash = "/?"
        parts.append(f"{slash}(?P<{name}>[^/.]{quantifier})")

    if last == 0:
        # no placeholders
        return path

    parts.append(path[last:])
    return "".join(parts)


def compile_pattern(path: str, defaults: Mapping[str, Any] | None = None) -> re.Pattern[str]:
    return re.compile(parse_pattern(path, defaults))
