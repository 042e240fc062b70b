# todos/todo_store.py

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import replace

from ..core.errors import StorageError
from ..core.ports import KeyValueStore, StatusSink
from .todo_models import StatusEvent, Todo, TodoId, TodoSnapshot

logger = logging.getLogger(__name__)

DEFAULT_KEY = "my-todo"


def search(todos: Iterable[Todo], query: str) -> list[Todo]:
    """
    Case-insensitive substring filter over titles.

    Pure projection: the result is a new list and must never be persisted.
    An empty query returns every todo in the original order.
    """
    if not query:
        return list(todos)
    needle = query.lower()
    return [t for t in todos if needle in t.title.lower()]


class TodoStore:
    """
    In-memory todo list synchronized with a key-value backend.

    The whole list lives under one key as a JSON array; every mutation rewrites it.
    A mutation is committed in memory only after the write succeeded, so a failed
    write raises StorageError and leaves the store exactly as it was.

    Edit mode:
    - Idle            --begin_edit(id)--> Editing(id)
    - Editing(id)     --submit(text)----> Idle
    - Editing(id)     --cancel_edit()---> Idle
    - Editing(id)     --submit("  ")----> Editing(id)  (rejected, nothing changes)

    Not thread-safe: all calls are expected from one event loop.
    """

    def __init__(
        self,
        backend: KeyValueStore,
        *,
        key: str = DEFAULT_KEY,
        status: StatusSink | None = None,
    ) -> None:
        self._backend = backend
        self._key = key
        self._status = status

        self._todos: list[Todo] = []
        self._edit_target: TodoId | None = None
        self._draft = ""
        self._query = ""
        self._next_id = 1

    # ---- read side ----

    @property
    def todos(self) -> tuple[Todo, ...]:
        return tuple(self._todos)

    @property
    def edit_target(self) -> TodoId | None:
        return self._edit_target

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def query(self) -> str:
        return self._query

    def snapshot(self) -> TodoSnapshot:
        return TodoSnapshot(
            todos=tuple(self._todos),
            edit_target=self._edit_target,
            draft=self._draft,
            query=self._query,
        )

    def get(self, todo_id: TodoId) -> Todo | None:
        for t in self._todos:
            if t.id == todo_id:
                return t
        return None

    def visible(self) -> list[Todo]:
        """What the list widget shows: filtered by the current query, newest first."""
        return list(reversed(search(self._todos, self._query)))

    # ---- serialization ----

    @staticmethod
    def _encode(todos: Sequence[Todo]) -> str:
        return json.dumps([t.to_dict() for t in todos], ensure_ascii=False)

    @staticmethod
    def _decode(blob: str) -> list[Todo]:
        """
        Parse a stored snapshot.

        Raises ValueError if the blob is not a JSON array.
        Individual bad records are dropped with a warning.
        """
        data = json.loads(blob)
        if not isinstance(data, list):
            raise ValueError(f"snapshot is not a list (got {type(data).__name__})")

        out: list[Todo] = []
        for i, raw in enumerate(data):
            try:
                out.append(Todo.from_dict(raw))
            except ValueError as e:
                logger.warning("Dropping malformed todo #%d: %s", i, e)
        return out

    # ---- persistence ----

    async def load(self) -> TodoSnapshot:
        """
        Read the snapshot once at startup.

        Missing key -> empty list. Backend errors and unparsable blobs are logged
        and leave the current list untouched.
        """
        try:
            blob = await self._backend.get(self._key)
        except Exception:
            logger.exception("Failed to read todos key=%s", self._key)
            return self.snapshot()

        if blob is None:
            logger.info("No stored todos under key=%s, starting empty.", self._key)
            return self.snapshot()

        try:
            todos = self._decode(blob)
        except (ValueError, RecursionError):
            # RecursionError: pathologically nested JSON.
            logger.exception("Stored todos under key=%s are malformed; ignoring them.", self._key)
            return self.snapshot()

        self._todos = todos
        self._bump_next_id(todos)
        logger.info("Loaded %d todos key=%s", len(todos), self._key)
        return self.snapshot()

    async def _persist(self, todos: Sequence[Todo]) -> None:
        blob = self._encode(todos)
        try:
            await self._backend.set(self._key, blob)
        except StorageError:
            logger.exception("Failed to write todos key=%s", self._key)
            raise
        except Exception as e:
            logger.exception("Failed to write todos key=%s", self._key)
            raise StorageError(f"failed to write {self._key!r}", key=self._key) from e
        logger.debug("Persisted %d todos key=%s bytes=%d", len(todos), self._key, len(blob))

    # ---- id management ----

    def _bump_next_id(self, todos: Iterable[Todo]) -> None:
        # Never hand out an id at or below one already seen, even after deletes.
        for t in todos:
            self._next_id = max(self._next_id, math.floor(t.id) + 1)

    def _allocate_id(self) -> int:
        nid = self._next_id
        self._next_id += 1
        return nid

    # ---- commands ----

    def set_query(self, query: str) -> TodoSnapshot:
        self._query = query
        return self.snapshot()

    def begin_edit(self, todo_id: TodoId, title: str) -> TodoSnapshot:
        """Enter edit mode for `todo_id` and seed the input with `title`. No write."""
        self._edit_target = todo_id
        self._draft = title
        logger.debug("Editing todo id=%s", todo_id)
        return self.snapshot()

    def cancel_edit(self) -> TodoSnapshot:
        if self._edit_target is not None:
            logger.debug("Edit cancelled id=%s", self._edit_target)
        self._edit_target = None
        self._draft = ""
        return self.snapshot()

    async def submit(self, text: str) -> TodoSnapshot:
        """
        Add a new todo, or update the one being edited.

        Whitespace-only text is ignored. The raw text (not stripped) is stored.
        """
        if not text or not text.strip():
            return self.snapshot()

        if self._edit_target is not None:
            return await self._update_title(self._edit_target, text)

        todo = Todo(id=self._next_id, title=text, is_done=False)
        await self._persist([*self._todos, todo])
        self._allocate_id()
        self._todos.append(todo)
        self._draft = ""
        logger.info("Todo added id=%s", todo.id)
        self._post(StatusEvent.ADDED)
        return self.snapshot()

    async def _update_title(self, todo_id: TodoId, text: str) -> TodoSnapshot:
        if self.get(todo_id) is None:
            logger.warning("Edit target id=%s no longer exists; leaving edit mode.", todo_id)
            self._edit_target = None
            return self.snapshot()

        updated = [replace(t, title=text) if t.id == todo_id else t for t in self._todos]
        await self._persist(updated)
        self._todos = updated
        self._edit_target = None
        self._draft = ""
        logger.info("Todo edited id=%s", todo_id)
        self._post(StatusEvent.EDITED)
        return self.snapshot()

    async def toggle_done(self, todo_id: TodoId) -> TodoSnapshot:
        """Flip is_done. Deliberately silent: no status message."""
        if self.get(todo_id) is None:
            logger.debug("toggle_done: no todo id=%s", todo_id)
            return self.snapshot()

        updated = [replace(t, is_done=not t.is_done) if t.id == todo_id else t for t in self._todos]
        await self._persist(updated)
        self._todos = updated
        return self.snapshot()

    async def remove(self, todo_id: TodoId) -> TodoSnapshot:
        if self.get(todo_id) is None:
            logger.debug("remove: no todo id=%s", todo_id)
            return self.snapshot()

        updated = [t for t in self._todos if t.id != todo_id]
        await self._persist(updated)
        self._todos = updated
        if self._edit_target == todo_id:
            self._edit_target = None
            self._draft = ""
        logger.info("Todo deleted id=%s", todo_id)
        self._post(StatusEvent.DELETED)
        return self.snapshot()

    def _post(self, event: StatusEvent) -> None:
        if self._status is None:
            return
        try:
            self._status.post(event.message)
        except Exception:
            logger.exception("Status sink failed for event=%s", event.value)
