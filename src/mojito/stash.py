"""Per-request stash — the dynamic value bag shared by routes, hooks and handlers.

Route defaults, captured placeholders and handler data all land here.
Values are strings, ints, bools or nested mappings. Merges are shallow
and last-writer-wins per key.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from mojito.errors import StashTypeMismatch


class Stash(dict[str, Any]):
    """A ``dict`` with shallow merge and type-checked accessors.

    Usage::

        stash = Stash(name="World")
        stash.merge({"name": "Gophers", "status": 201})
        stash.string("name")   # "Gophers"
        stash.integer("status")  # 201
    """

    __slots__ = ()

    def merge(self, *others: Mapping[str, Any]) -> Stash:
        """Copy every key of *others* into this stash, later values winning."""
        for other in others:
            self.update(other)
        return self

    def string(self, key: str, default: str = "") -> str:
        """Return the value for *key* as a string.

        Returns *default* when the key is missing. Raises
        ``StashTypeMismatch`` when the value is not a ``str``.
        """
        if key not in self:
            return default
        value = self[key]
        if not isinstance(value, str):
            raise StashTypeMismatch(key, str, value)
        return value

    def integer(self, key: str, default: int | None = None) -> int | None:
        """Return the value for *key* as an int, or *default* if missing."""
        if key not in self:
            return default
        value = self[key]
        # bool is an int subclass, but True is not a status code
        if not isinstance(value, int) or isinstance(value, bool):
            raise StashTypeMismatch(key, int, value)
        return value

    def copy(self) -> Stash:
        return Stash(self)
