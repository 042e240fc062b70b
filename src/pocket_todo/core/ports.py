# src/pocket_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The todo store depends on Protocols instead of concrete implementations.
This keeps storage backends and presentation layers swappable and makes testing easier.
"""

from collections.abc import Callable
from typing import Protocol

StatusListener = Callable[[str], None]
# Called with the current status text; "" means the banner was cleared.


class KeyValueStore(Protocol):
    """
    Durable key-value backend.

    Values are opaque text blobs. `set` raises StorageError when the write
    did not reach durable storage.
    """

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...


class StatusSink(Protocol):
    """Where the store posts transient status messages ("added", "deleted", ...)."""

    def post(self, message: str) -> None: ...
