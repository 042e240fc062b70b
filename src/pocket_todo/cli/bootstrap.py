# src/pocket_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the storage backend, status banner and todo store into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import KeyValueStore
from ..core.state import AppState
from ..storage import open_backend
from ..todos.status import StatusNotifier
from ..todos.todo_store import TodoStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.kv_db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.kv_json_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, backend: KeyValueStore | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings(). A backend can be injected
    (tests); otherwise one is opened from settings.storage_backend.
    The todo list is NOT loaded here: call `await state.store.load()` from the event loop.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if backend is None:
        backend = open_backend(settings)

    status = StatusNotifier(clear_after=settings.status_clear_seconds)
    store = TodoStore(backend, key=settings.storage_key, status=status)
    logger.debug(
        "State created backend=%s key=%s",
        type(backend).__name__,
        settings.storage_key,
    )
    return AppState(settings=settings, backend=backend, store=store, status=status)
