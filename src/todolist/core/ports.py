# src/todolist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage and the clock swappable and makes testing easier.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Protocol

from ..tasks.task_models import MutationResult, Task


class SnapshotGateway(Protocol):
    """Durable load/save of the full task collection."""

    def load(self) -> list[Task]: ...
    def save(self, tasks: Iterable[Task]) -> bool: ...


class Clock(Protocol):
    """Source of local "now" used to stamp new tasks."""

    def __call__(self) -> datetime: ...


class TaskRepo(Protocol):
    def __len__(self) -> int: ...
    def get(self, task_id: str) -> Task | None: ...
    def list(self) -> list[Task]: ...
    def snapshot(self) -> list[Task]: ...
    def count_completed(self) -> int: ...

    def add(self, text: str, date: str, time: str) -> Task | None: ...
    def update(self, task_id: str, new_text: str) -> MutationResult: ...
    def set_completed(self, task_id: str, completed: bool) -> MutationResult: ...
    def remove(self, task_id: str) -> MutationResult: ...
