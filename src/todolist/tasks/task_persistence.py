# src/todolist/tasks/task_persistence.py

"""
JSON snapshot persistence for the task list.

The whole collection is written on every save (full overwrite) and read back
as a unit at startup. Two on-disk shapes are understood:

- legacy: a bare JSON array of task records
- current: {"version": 1, "tasks": [...]}

Saves always write the current shape via temp file + os.replace, so a crash
mid-write never leaves a truncated snapshot behind.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Any

from .task_models import Task

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

_STR_FIELDS = ("id", "text", "date", "time")
_FLAG_FIELD = "isCompleted"


class SnapshotFormatError(ValueError):
    """Raised internally when the stored snapshot cannot be decoded."""


def task_to_record(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "date": task.date,
        "time": task.time,
        _FLAG_FIELD: task.is_completed,
    }


def record_to_task(raw: Any) -> Task:
    if not isinstance(raw, dict):
        raise SnapshotFormatError(f"task record must be an object, got {type(raw).__name__}")

    for name in _STR_FIELDS:
        if name not in raw:
            raise SnapshotFormatError(f"task record is missing {name!r}")
        if not isinstance(raw[name], str):
            raise SnapshotFormatError(f"task field {name!r} must be a string")

    if _FLAG_FIELD not in raw:
        raise SnapshotFormatError(f"task record is missing {_FLAG_FIELD!r}")
    # bool only: 0/1 are not accepted as completion flags.
    if not isinstance(raw[_FLAG_FIELD], bool):
        raise SnapshotFormatError(f"task field {_FLAG_FIELD!r} must be a boolean")

    return Task(
        id=raw["id"],
        text=raw["text"],
        date=raw["date"],
        time=raw["time"],
        is_completed=raw[_FLAG_FIELD],
    )


def decode_snapshot(data: Any) -> list[Task]:
    """Decode parsed JSON (either shape) into tasks, or raise SnapshotFormatError."""
    if isinstance(data, list):
        records = data
    elif isinstance(data, dict):
        version = data.get("version")
        if version != SCHEMA_VERSION:
            raise SnapshotFormatError(f"unsupported snapshot version {version!r}")
        records = data.get("tasks")
        if not isinstance(records, list):
            raise SnapshotFormatError("'tasks' must be an array")
    else:
        raise SnapshotFormatError(f"snapshot must be an array or object, got {type(data).__name__}")

    tasks = [record_to_task(r) for r in records]

    seen: set[str] = set()
    for t in tasks:
        if t.id in seen:
            raise SnapshotFormatError(f"duplicate task id {t.id!r}")
        seen.add(t.id)
    return tasks


def encode_snapshot(tasks: Iterable[Task]) -> dict[str, Any]:
    return {"version": SCHEMA_VERSION, "tasks": [task_to_record(t) for t in tasks]}


class JsonFileGateway:
    """
    Load/save boundary between TaskStore and a single JSON file.

    Neither method raises: load() falls back to an empty list, save() reports
    failure through its return value and the log.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        quarantine_corrupt: bool = True,
        indent: int | None = 2,
    ) -> None:
        self._path = Path(path)
        self._quarantine_corrupt = quarantine_corrupt
        self._indent = indent

    @property
    def path(self) -> Path:
        return self._path

    # ---- load ----

    def load(self) -> list[Task]:
        path = self._path
        if not path.exists():
            logger.info("No task snapshot at %s; starting empty.", path)
            return []

        try:
            raw = path.read_bytes()
            data = json.loads(raw.decode("utf-8"))
            tasks = decode_snapshot(data)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            # json.JSONDecodeError and SnapshotFormatError are ValueErrors.
            logger.warning("Task snapshot %s is unreadable (%s); starting empty.", path, e)
            self._quarantine(path)
            return []

        logger.info("Loaded %d tasks from %s", len(tasks), path)
        return tasks

    def _quarantine(self, path: Path) -> None:
        if not self._quarantine_corrupt or not path.exists():
            return
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S-%f")
        target = path.with_name(f"{path.name}.corrupt-{stamp}")
        n = 1
        # os.replace would silently clobber an earlier quarantined copy.
        while target.exists():
            target = path.with_name(f"{path.name}.corrupt-{stamp}-{n}")
            n += 1
        try:
            os.replace(path, target)
            logger.warning("Moved unreadable snapshot aside to %s", target)
        except OSError:
            logger.exception("Failed to move unreadable snapshot %s aside.", path)

    # ---- save ----

    def save(self, tasks: Iterable[Task]) -> bool:
        path = self._path
        tmp_name: str | None = None
        try:
            payload = json.dumps(encode_snapshot(tasks), ensure_ascii=False, indent=self._indent)
            path.parent.mkdir(parents=True, exist_ok=True)

            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            if path.exists():
                # mkstemp creates 0600; keep the snapshot's existing permissions.
                os.chmod(tmp_name, path.stat().st_mode & 0o777)
            os.replace(tmp_name, path)
            tmp_name = None
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to save tasks to %s", path)
            return False
        finally:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)

        logger.debug("Saved tasks to %s", path)
        return True
