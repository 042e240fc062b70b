# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from pocket_todo.config import Settings


def test_defaults(monkeypatch) -> None:
    for name in (
        "POCKET_DATA_DIR",
        "POCKET_STORAGE_BACKEND",
        "POCKET_STORAGE_KEY",
        "POCKET_KV_DB_PATH",
        "POCKET_KV_JSON_PATH",
        "POCKET_STATUS_CLEAR_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()

    assert s.storage_backend == "sqlite"
    assert s.storage_key == "my-todo"
    assert s.status_clear_seconds == 3.0
    assert s.kv_db_path == Path(".local/pocket_todo") / "todos.sqlite3"


def test_env_overrides_and_bad_values(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("POCKET_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("POCKET_STORAGE_BACKEND", "JSON")
    monkeypatch.delenv("POCKET_KV_JSON_PATH", raising=False)
    monkeypatch.setenv("POCKET_STATUS_CLEAR_SECONDS", "soon")

    s = Settings.from_env()

    assert s.storage_backend == "json"
    assert s.kv_json_path == tmp_path / "todos.json"
    assert s.status_clear_seconds == 3.0

    monkeypatch.setenv("POCKET_STORAGE_BACKEND", "redis")
    monkeypatch.setenv("POCKET_STATUS_CLEAR_SECONDS", "0.5")
    s = Settings.from_env()
    assert s.storage_backend == "sqlite"
    assert s.status_clear_seconds == 0.5
