"""
Key-value storage backends.

Components:
- sqlite_kv.py: SQLite table, one row per key (default)
- json_kv.py: single JSON file, atomic replace on write
"""

from __future__ import annotations

from ..core.ports import KeyValueStore
from .json_kv import JsonFileKeyValueStore
from .sqlite_kv import SqliteKeyValueStore

__all__ = ["JsonFileKeyValueStore", "SqliteKeyValueStore", "open_backend"]


def open_backend(settings) -> KeyValueStore:
    """Build the backend named by settings.storage_backend ("sqlite" or "json")."""
    kind = str(getattr(settings, "storage_backend", "sqlite")).lower()
    if kind == "json":
        return JsonFileKeyValueStore(settings.kv_json_path)
    if kind == "sqlite":
        return SqliteKeyValueStore(settings.kv_db_path)
    raise ValueError(f"Unknown storage backend: {kind!r}")
