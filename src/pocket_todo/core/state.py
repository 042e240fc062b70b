# src/pocket_todo/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..todos.status import StatusNotifier
from ..todos.todo_store import TodoStore
from .ports import KeyValueStore


@dataclass
class AppState:
    """
    Everything one screen needs, owned in one place and passed by reference.

    settings is kept as Any so tests can pass a SimpleNamespace.
    """

    settings: Any
    backend: KeyValueStore
    store: TodoStore
    status: StatusNotifier
