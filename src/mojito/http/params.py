"""URL query and form body parameters.

Implements the ``MultiValueMapping`` protocol on top of ``MultiDict``.
"""

from __future__ import annotations

from urllib.parse import parse_qsl

from mojito._internal.multimap import MultiDict


class Parameters(MultiDict):
    """Multi-valued, case-sensitive parameter map.

    ``param`` returns the first value or ``""``; ``every_param`` returns
    every value or an empty list. A name with no values does not exist.
    """

    __slots__ = ()

    @classmethod
    def parse(cls, query_string: str | bytes) -> Parameters:
        """Parse a URL-encoded string (``a=1&b=2&a=3``)."""
        if isinstance(query_string, bytes):
            query_string = query_string.decode("latin-1")
        return cls(parse_qsl(query_string, keep_blank_values=True))

    def exists(self, name: str) -> bool:
        """True if *name* is present with at least one value."""
        return name in self

    def names(self) -> list[str]:
        """Return the names of all parameters."""
        return list(self)

    def param(self, name: str) -> str:
        """Return the first value of *name*, or ``""`` if it does not exist."""
        return self.get(name) or ""

    def every_param(self, name: str) -> list[str]:
        """Return all values of *name*, or an empty list."""
        return self.get_list(name)

    def get_int(self, name: str, default: int | None = None) -> int | None:
        """Return value as int, or *default* if missing or not numeric."""
        value = self.get(name)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default
