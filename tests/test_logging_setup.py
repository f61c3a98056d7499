# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

from todolist.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("todolist.tasks.task_store", logging.DEBUG))
    assert not f.filter(_record("urllib3", logging.WARNING))
    assert f.filter(_record("urllib3", logging.ERROR))
    assert f.filter(_record("py.warnings", logging.WARNING))
    assert not f.filter(_record("py.warnings", logging.INFO))


def test_setup_logging_writes_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        log_file = setup_logging(log_dir=tmp_path / "logs", console_level=logging.WARNING)
        logging.getLogger("todolist.test").debug("hello file")
        for h in root.handlers:
            h.flush()
        assert log_file == tmp_path / "logs" / "todolist.log"
        assert "hello file" in log_file.read_text("utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)
