"""Base type shared by Request and Response: headers plus content."""

from __future__ import annotations

from dataclasses import dataclass, field

from mojito.http.asset import Asset, MemoryAsset
from mojito.http.headers import Headers


@dataclass(slots=True)
class Message:
    """Headers and a content asset. Empty by default."""

    headers: Headers = field(default_factory=Headers)
    content: Asset = field(default_factory=MemoryAsset)

    @property
    def body(self) -> str:
        """Content decoded as UTF-8 text."""
        return str(self.content)

    @property
    def body_bytes(self) -> bytes:
        return self.content.read()
