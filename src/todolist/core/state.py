# src/todolist/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .ports import Clock, SnapshotGateway, TaskRepo


def local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    store: TaskRepo
    gateway: SnapshotGateway
    clock: Clock = local_now

    # Caller-owned edit target: the id of the task whose text the next
    # submit replaces. Cleared after a successful update or once the id
    # disappears from the store.
    editing_id: str | None = None
