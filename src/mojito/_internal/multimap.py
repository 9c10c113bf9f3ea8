"""Multi-valued string maps — shared base for Headers and Parameters.

``MultiValueMapping`` is the structural protocol utilities accept.
``MultiDict`` is the concrete, mutable implementation: every key holds a
list of values, ``__getitem__`` returns the first one and ``get_list``
returns them all.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class MultiValueMapping(Protocol):
    """A string mapping where keys can have multiple values.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    """

    def __getitem__(self, key: str) -> str: ...
    def __contains__(self, key: object) -> bool: ...
    def __iter__(self) -> Iterator[str]: ...
    def __len__(self) -> int: ...
    def get(self, key: str, default: str | None = None) -> str | None: ...
    def get_list(self, key: str) -> list[str]: ...


class MultiDict(MutableMapping[str, str]):
    """Mutable multi-valued mapping with insertion-ordered keys.

    Subclasses override ``_key`` to normalise names (headers are
    case-insensitive, parameters are not).

    A key whose value list is empty counts as absent: ``exists`` and
    ``in`` both report ``False`` for it.
    """

    __slots__ = ("_data",)

    def __init__(
        self,
        data: Mapping[str, str | Iterable[str]] | Iterable[tuple[str, str]] | None = None,
    ) -> None:
        self._data: dict[str, list[str]] = {}
        if data is None:
            return
        items = data.items() if isinstance(data, Mapping) else data
        for name, value in items:
            if isinstance(value, str):
                self.add(name, value)
            else:
                for v in value:
                    self.add(name, v)

    def _key(self, name: str) -> str:
        return name

    # -- Mapping protocol --

    def __getitem__(self, key: str) -> str:
        values = self._data.get(self._key(key))
        if not values:
            raise KeyError(key)
        return values[0]

    def __setitem__(self, key: str, value: str) -> None:
        self._data[self._key(key)] = [value]

    def __delitem__(self, key: str) -> None:
        del self._data[self._key(key)]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return bool(self._data.get(self._key(key)))

    def __iter__(self) -> Iterator[str]:
        return (k for k, v in self._data.items() if v)

    def __len__(self) -> int:
        return sum(1 for v in self._data.values() if v)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MultiDict):
            return self.to_dict() == other.to_dict()
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    # -- Multi-value API --

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* (empty list if missing)."""
        return list(self._data.get(self._key(key), ()))

    def add(self, key: str, value: str) -> None:
        """Append *value* to the values of *key*."""
        self._data.setdefault(self._key(key), []).append(value)

    def set_list(self, key: str, values: Iterable[str]) -> None:
        """Replace every value of *key*."""
        self._data[self._key(key)] = list(values)

    def update_lists(self, other: MultiDict) -> None:
        """Replace this map's values with *other*'s, key by key."""
        for key in other:
            self.set_list(key, other.get_list(key))

    def pairs(self) -> list[tuple[str, str]]:
        """Return every ``(name, value)`` pair, in insertion order."""
        return [(k, v) for k, values in self._data.items() for v in values]

    def to_dict(self) -> dict[str, list[str]]:
        """Return a plain ``dict`` of name -> list of values."""
        return {k: list(v) for k, v in self._data.items() if v}

    def copy(self) -> MultiDict:
        clone = type(self)()
        clone._data = {k: list(v) for k, v in self._data.items()}
        return clone
