# storage/json_kv.py

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any

from ..core.errors import StorageError

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore:
    """
    Key-value store kept in a single JSON object file: {"key": "blob", ...}.

    Writes go to a temp file first and are moved into place with os.replace,
    so a crash mid-write never leaves a half-written file behind.
    """

    def __init__(self, path: str | Path = "todos.json") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text("utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self._path} does not hold a JSON object")
        # Values are kept as found so a rewrite never drops keys written by others.
        return data

    def _get_sync(self, key: str) -> str | None:
        value = self._read_all().get(key)
        if value is None or isinstance(value, str):
            return value
        logger.warning("Ignoring non-text value for key=%s in %s", key, self._path)
        return None

    def _set_sync(self, key: str, value: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        try:
            data = self._read_all()
        except ValueError:
            logger.warning("Overwriting unreadable store file %s", self._path)
            data = {}
        data[key] = value

        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(Exception):
            # Best-effort: keep personal data private on disk.
            os.chmod(self._path, 0o600)

    async def get(self, key: str) -> str | None:
        try:
            return await asyncio.to_thread(self._get_sync, key)
        except (OSError, ValueError) as e:
            raise StorageError(f"cannot read {self._path}: {e}", key=key) from e

    async def set(self, key: str, value: str) -> None:
        try:
            await asyncio.to_thread(self._set_sync, key, value)
        except OSError as e:
            raise StorageError(f"cannot write {self._path}: {e}", key=key) from e
        logger.debug("kv set key=%s path=%s bytes=%d", key, self._path, len(value))
