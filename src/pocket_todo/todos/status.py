# todos/status.py

from __future__ import annotations

import asyncio
import logging

from ..core.ports import StatusListener

logger = logging.getLogger(__name__)


class StatusNotifier:
    """
    Transient status banner with one debounced clear timer.

    Posting a message cancels the pending clear (if any) and schedules a new one,
    so the banner always stays visible for `clear_after` seconds after the
    latest post. Listeners get every change, including the clear to "".
    """

    def __init__(self, clear_after: float = 3.0) -> None:
        self.clear_after = max(0.0, float(clear_after))
        self._message = ""
        self._handle: asyncio.TimerHandle | None = None
        self._listeners: list[StatusListener] = []

    @property
    def message(self) -> str:
        return self._message

    def subscribe(self, listener: StatusListener) -> None:
        self._listeners.append(listener)

    def post(self, message: str) -> None:
        """Show `message` now and clear it later. Must be called from the event loop."""
        loop = asyncio.get_running_loop()
        self._cancel_pending()
        self._set(message)
        if message:
            self._handle = loop.call_later(self.clear_after, self._clear)

    def close(self) -> None:
        """Drop the pending clear; used on shutdown."""
        self._cancel_pending()

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _clear(self) -> None:
        self._handle = None
        self._set("")

    def _set(self, message: str) -> None:
        self._message = message
        for listener in list(self._listeners):
            try:
                listener(message)
            except Exception:
                logger.exception("Status listener failed.")
