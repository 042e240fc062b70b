# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

from pocket_todo.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_levels() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("pocket_todo.todos.todo_store", logging.DEBUG))
    assert not f.filter(_record("pocket_todo.connectors.console_connector", logging.INFO))
    assert f.filter(_record("pocket_todo.connectors.console_connector", logging.WARNING))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert not f.filter(_record("asyncio", logging.WARNING))
    assert f.filter(_record("asyncio", logging.ERROR))


def test_setup_logging_writes_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        log_file = setup_logging(log_dir=tmp_path / "logs")
        logging.getLogger("pocket_todo.test").debug("hello %s", "file")
        for h in root.handlers:
            h.flush()
        assert log_file.read_text("utf-8").strip().endswith("pocket_todo.test: hello file")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)
