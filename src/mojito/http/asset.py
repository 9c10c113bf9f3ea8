"""Message content — in-memory buffers and files behind one interface.

An ``Asset`` knows its length, can be restricted to a byte range, and
can serve itself to any ``write(bytes)`` callable in chunks.
"""

from __future__ import annotations

import io
import os
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any, BinaryIO

CHUNK_SIZE = 64 * 1024


class Asset(ABC):
    """Content of a request or response.

    ``set_range(start, end)`` restricts every read to the inclusive byte
    range; ``-1`` leaves that side open. A suffix range ``(-1, n)``
    selects the last *n* bytes.
    """

    __slots__ = ("_end", "_start", "has_range")

    def __init__(self) -> None:
        self.has_range = False
        self._start = -1
        self._end = -1

    @property
    @abstractmethod
    def size(self) -> int:
        """Total size in bytes, ignoring any range."""

    @abstractmethod
    def _read_span(self, offset: int, length: int) -> Iterator[bytes]: ...

    @abstractmethod
    def add_chunk(self, data: bytes) -> None:
        """Append *data* to the end of the content."""

    def set_range(self, start: int, end: int) -> None:
        self._start = start
        self._end = end
        self.has_range = start >= 0 or end >= 0

    def span(self) -> tuple[int, int]:
        """Return the ``(offset, length)`` selected by the current range."""
        size = self.size
        if not self.has_range:
            return 0, size
        if self._start < 0:
            # suffix range: last N bytes
            length = min(self._end, size)
            return size - length, length
        start = min(self._start, size)
        end = size - 1 if self._end < 0 else min(self._end, size - 1)
        return start, max(end - start + 1, 0)

    @property
    def length(self) -> int:
        """Length of the selected bytes."""
        return self.span()[1]

    def chunks(self, size: int = CHUNK_SIZE) -> Iterator[bytes]:
        """Yield the selected bytes in pieces of at most *size*."""
        offset, length = self.span()
        if length <= 0:
            return
        for chunk in self._read_span(offset, length):
            for i in range(0, len(chunk), size):
                yield chunk[i : i + size]

    def read(self) -> bytes:
        return b"".join(self.chunks())

    def serve(self, write: Callable[[bytes], Any]) -> None:
        """Write the selected bytes to *write*, chunk by chunk."""
        for chunk in self.chunks():
            write(chunk)

    def __str__(self) -> str:
        return self.read().decode("utf-8", errors="replace")


class MemoryAsset(Asset):
    """Content held in a ``bytearray``."""

    __slots__ = ("_buffer",)

    def __init__(self, data: bytes | bytearray = b"") -> None:
        super().__init__()
        self._buffer = bytearray(data)

    @property
    def size(self) -> int:
        return len(self._buffer)

    def _read_span(self, offset: int, length: int) -> Iterator[bytes]:
        yield bytes(self._buffer[offset : offset + length])

    def add_chunk(self, data: bytes) -> None:
        self._buffer.extend(data)

    def __repr__(self) -> str:
        return f"MemoryAsset({bytes(self._buffer)!r})"


class FileAsset(Asset):
    """Content backed by a file on disk, read lazily."""

    __slots__ = ("path",)

    def __init__(self, path: str | os.PathLike[str]) -> None:
        super().__init__()
        self.path = Path(path)

    @property
    def size(self) -> int:
        return self.path.stat().st_size

    def _read_span(self, offset: int, length: int) -> Iterator[bytes]:
        with self.path.open("rb") as fh:
            fh.seek(offset)
            remaining = length
            while remaining > 0:
                chunk = fh.read(min(CHUNK_SIZE, remaining))
                if not chunk:
                    break
                remaining -= len(chunk)
                yield chunk

    def add_chunk(self, data: bytes) -> None:
        with self.path.open("ab") as fh:
            fh.write(data)

    def __repr__(self) -> str:
        return f"FileAsset({str(self.path)!r})"


def new_asset(content: str | bytes | bytearray | os.PathLike[str] | BinaryIO) -> Asset:
    """Build an Asset from a string, bytes, a path, or a binary file object.

    Named files become ``FileAsset``; anonymous streams are read into memory.
    """
    match content:
        case str():
            return MemoryAsset(content.encode("utf-8"))
        case bytes() | bytearray():
            return MemoryAsset(content)
        case os.PathLike():
            return FileAsset(content)
        case io.IOBase():
            name = getattr(content, "name", None)
            if isinstance(name, str) and os.path.isfile(name):
                return FileAsset(name)
            return MemoryAsset(content.read())
    msg = f"Cannot build an asset from {type(content).__name__}"
    raise TypeError(msg)
