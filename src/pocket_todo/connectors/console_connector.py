# src/pocket_todo/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from ..cli.commands import format_todos
from ..cli.commands import registry as command_registry
from ..core.errors import StorageError
from ..core.state import AppState

logger = logging.getLogger(__name__)

ReadLine = Callable[[str], Awaitable[str]]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


async def _read_stdin(prompt: str) -> str:
    # input() blocks; run it off the loop so the status timer can still fire.
    return await asyncio.to_thread(input, prompt)


def _prompt(state: AppState) -> str:
    return "edit> " if state.store.snapshot().editing else "todo> "


async def handle_line(state: AppState, line: str) -> str | None:
    """
    One user action: a slash command or a plain title to submit.
    Titles are submitted as typed; only command detection looks at the stripped line.
    Returns the text to print, or None for nothing.
    """
    cmd_response = await command_registry.handle(state, line.strip())
    if cmd_response is not None:
        return cmd_response

    await state.store.submit(line)
    return format_todos(state.store.visible(), query=state.store.query)


async def run_console_loop(state: AppState, *, read_line: ReadLine | None = None) -> None:
    read = read_line or _read_stdin
    logger.info("Console connector started.")

    def on_status(message: str) -> None:
        if message:
            _print_ts(f"** {message} **")

    state.status.subscribe(on_status)

    _print_ts("[CONSOLE] Type a todo to add it. Use /help for commands. Use /exit to quit.\n")
    print(format_todos(state.store.visible()))

    while True:
        try:
            raw = await read(_prompt(state))
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        user_input = raw.strip()
        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = await handle_line(state, raw)
        except StorageError as e:
            logger.warning("Write failed, nothing was changed: %s", e)
            _print_ts(f"[STORAGE] Could not save, nothing was changed: {e}")
            continue
        except Exception:
            logger.exception("Console command handler crashed.")
            _print_ts("Internal error while handling input.")
            continue

        if response:
            print(response)

    logger.info("Console connector finished.")
