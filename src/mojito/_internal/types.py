"""Callable shapes used across the framework."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from mojito.context import Context

Handler: TypeAlias = Callable[["Context"], None]
UnderHandler: TypeAlias = Callable[["Context"], bool]
HookHandler: TypeAlias = Callable[["Context"], None]
