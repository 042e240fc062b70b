# src/pocket_todo/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence

from ..core.state import AppState
from ..todos.todo_models import Todo

CommandHandler = Callable[[AppState, list[str]], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /done, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("Any other text adds a todo (or updates the one being edited).")
        return "\n".join(lines)


registry = CommandRegistry()


def format_todos(todos: Sequence[Todo], *, query: str = "") -> str:
    """Numbered list, in the order given (callers pass store.visible())."""
    if not todos:
        return f"No todos match {query!r}." if query else "No todos yet."
    lines = []
    for i, t in enumerate(todos, start=1):
        mark = "x" if t.is_done else " "
        lines.append(f"{i:>3}. [{mark}] {t.title}")
    return "\n".join(lines)


def _pick(state: AppState, args: list[str]) -> Todo | str:
    """Resolve a 1-based position in the visible list. Returns an error string on failure."""
    if not args:
        return "Which one? Pass the number shown by /list."
    try:
        pos = int(args[0])
    except ValueError:
        return f"Not a number: {args[0]!r}."
    items = state.store.visible()
    if pos < 1 or pos > len(items):
        return f"No todo #{pos} (showing {len(items)})."
    return items[pos - 1]


async def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_list(state: AppState, args: list[str]) -> str:
    return format_todos(state.store.visible(), query=state.store.query)


async def cmd_done(state: AppState, args: list[str]) -> str:
    picked = _pick(state, args)
    if isinstance(picked, str):
        return picked
    await state.store.toggle_done(picked.id)
    now = state.store.get(picked.id)
    flag = "done" if now is not None and now.is_done else "not done"
    return f"Marked {picked.title!r} as {flag}."


async def cmd_delete(state: AppState, args: list[str]) -> str:
    picked = _pick(state, args)
    if isinstance(picked, str):
        return picked
    await state.store.remove(picked.id)
    return format_todos(state.store.visible(), query=state.store.query)


async def cmd_edit(state: AppState, args: list[str]) -> str:
    picked = _pick(state, args)
    if isinstance(picked, str):
        return picked
    state.store.begin_edit(picked.id, picked.title)
    return f"Editing: {picked.title}\nType the new title (or /cancel)."


async def cmd_cancel(state: AppState, args: list[str]) -> str:
    if state.store.edit_target is None:
        return "Not editing anything."
    state.store.cancel_edit()
    return "Edit cancelled."


async def cmd_find(state: AppState, args: list[str]) -> str:
    """
    /find words  -> filter the list (case-insensitive)
    /find        -> clear the filter
    """
    state.store.set_query(" ".join(args))
    return format_todos(state.store.visible(), query=state.store.query)


async def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.store
    total = len(store.todos)
    done = sum(1 for t in store.todos if t.is_done)
    mode = "EDITING" if store.edit_target is not None else "IDLE"
    backend = getattr(state.settings, "storage_backend", type(state.backend).__name__)
    return (
        "Status:\n"
        f"  Todos: {total} ({done} done)\n"
        f"  Mode: {mode}\n"
        f"  Filter: {store.query or '(none)'}\n"
        f"  Storage: {backend}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show todos, newest first.", aliases=["ls"])
registry.register("done", cmd_done, help_text="Toggle done: /done N.", aliases=["x"])
registry.register("del", cmd_delete, help_text="Delete: /del N.", aliases=["rm"])
registry.register("edit", cmd_edit, help_text="Edit title: /edit N, then type the new text.")
registry.register("cancel", cmd_cancel, help_text="Leave edit mode without saving.")
registry.register("find", cmd_find, help_text="Filter: /find text | /find (clear).", aliases=["search"])
registry.register("status", cmd_status, help_text="Show counts, mode and storage.")
