# src/todolist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- restores the task list from the snapshot file,
- wires TaskStore change notifications to the gateway's save().
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Clock
from ..core.state import AppState, local_now
from ..tasks.task_persistence import JsonFileGateway
from ..tasks.task_store import IdFactory, TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    clock: Clock | None = None,
    id_factory: IdFactory | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    gateway = JsonFileGateway(
        settings.tasks_path,
        quarantine_corrupt=getattr(settings, "quarantine_corrupt", True),
        indent=getattr(settings, "json_indent", 2) or None,
    )

    store = TaskStore(gateway.load(), on_change=gateway.save, id_factory=id_factory)
    logger.info("Task list ready: %d tasks (%s)", len(store), gateway.path)

    return AppState(
        settings=settings,
        store=store,
        gateway=gateway,
        clock=clock or local_now,
    )
