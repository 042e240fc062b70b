# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field

from pocket_todo.core.errors import StorageError


@dataclass(slots=True)
class FakeKeyValueStore:
    """
    In-memory KeyValueStore for unit tests.

    - Captures every write for assertions
    - Can be told to fail reads or writes
    """

    data: dict[str, str] = field(default_factory=dict)
    writes: list[tuple[str, str]] = field(default_factory=list)
    fail_reads: bool = False
    fail_writes: bool = False

    async def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageError("fake read failure", key=key)
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("fake write failure", key=key)
        self.writes.append((key, value))
        self.data[key] = value


@dataclass(slots=True)
class RecordingStatus:
    """StatusSink that only records what was posted (no timers)."""

    posted: list[str] = field(default_factory=list)

    def post(self, message: str) -> None:
        self.posted.append(message)
