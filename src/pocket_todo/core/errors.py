# src/pocket_todo/core/errors.py

from __future__ import annotations


class TodoError(Exception):
    """Base error for the todo core."""


class StorageError(TodoError):
    """A key-value backend could not read or write a value."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key
