# todos/todo_models.py

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

TodoId = int | float
# New ids are ints; snapshots written by the mobile app carry random floats.


class StatusEvent(StrEnum):
    """Mutations that announce themselves in the status banner."""

    ADDED = "added"
    EDITED = "edited"
    DELETED = "deleted"

    @property
    def message(self) -> str:
        return f"Todo {self.value} successfully!"


@dataclass(frozen=True, slots=True)
class Todo:
    id: TodoId
    title: str
    is_done: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "isDone": self.is_done}

    @classmethod
    def from_dict(cls, raw: Any) -> Todo:
        """
        Parse one stored record.

        Raises ValueError for anything that is not {id: number, title: str, isDone?: bool}.
        """
        if not isinstance(raw, dict):
            raise ValueError(f"record is not an object: {raw!r}")

        tid = raw.get("id")
        # bool is an int subclass; never accept it as an id.
        if isinstance(tid, bool) or not isinstance(tid, (int, float)):
            raise ValueError(f"record has no numeric id: {raw!r}")
        try:
            finite = math.isfinite(tid)
        except OverflowError:
            # int too large for a float: no client could have produced it.
            finite = False
        if not finite:
            raise ValueError(f"record id is out of range: {raw!r}")

        title = raw.get("title")
        if not isinstance(title, str):
            raise ValueError(f"record has no title: {raw!r}")

        done = raw.get("isDone", False)
        if not isinstance(done, bool):
            raise ValueError(f"record has non-boolean isDone: {raw!r}")

        return cls(id=tid, title=title, is_done=done)


@dataclass(frozen=True, slots=True)
class TodoSnapshot:
    """Read-only view of the store state handed to the presentation layer."""

    todos: tuple[Todo, ...]
    edit_target: TodoId | None
    draft: str
    query: str

    @property
    def editing(self) -> bool:
        return self.edit_target is not None
