# tests/test_todo_models.py

from __future__ import annotations

import pytest

from pocket_todo.todos.todo_models import StatusEvent, Todo, TodoSnapshot


def test_todo_dict_uses_stored_field_names() -> None:
    assert Todo(7, "x", True).to_dict() == {"id": 7, "title": "x", "isDone": True}
    assert Todo.from_dict({"id": 7, "title": "x", "isDone": True}) == Todo(7, "x", True)


@pytest.mark.parametrize(
    "raw",
    [
        [],
        {"title": "no id"},
        {"id": True, "title": "bool id"},
        {"id": float("nan"), "title": "nan id"},
        {"id": 10**400, "title": "too big for a float"},
        {"id": 1, "title": None},
        {"id": 1, "title": "x", "isDone": "yes"},
    ],
)
def test_from_dict_rejects_malformed(raw) -> None:
    with pytest.raises(ValueError):
        Todo.from_dict(raw)


def test_status_messages() -> None:
    assert StatusEvent.ADDED.message == "Todo added successfully!"
    assert StatusEvent.EDITED.message == "Todo edited successfully!"
    assert StatusEvent.DELETED.message == "Todo deleted successfully!"


def test_snapshot_editing_flag() -> None:
    assert TodoSnapshot(todos=(), edit_target=None, draft="", query="").editing is False
    assert TodoSnapshot(todos=(), edit_target=3, draft="x", query="").editing is True
