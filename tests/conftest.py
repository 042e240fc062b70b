# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from pocket_todo.cli.bootstrap import create_initial_state
from pocket_todo.core.state import AppState
from pocket_todo.todos.todo_store import TodoStore

from .fakes import FakeKeyValueStore, RecordingStatus


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the store.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment and .env.
    """
    return SimpleNamespace(
        app_name="pocket-todo-test",
        log_level="DEBUG",
        storage_backend="sqlite",
        storage_key="my-todo",
        data_dir=tmp_path / "data",
        kv_db_path=tmp_path / "data" / "todos.sqlite3",
        kv_json_path=tmp_path / "data" / "todos.json",
        status_clear_seconds=0.05,
    )


@pytest.fixture()
def kv() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture()
def status() -> RecordingStatus:
    return RecordingStatus()


@pytest.fixture()
def store(kv: FakeKeyValueStore, status: RecordingStatus) -> TodoStore:
    return TodoStore(kv, key="my-todo", status=status)


@pytest.fixture()
def state(settings: SimpleNamespace, kv: FakeKeyValueStore) -> AppState:
    """AppState wired with the in-memory backend and a real (fast) status banner."""
    return create_initial_state(settings=settings, backend=kv)
