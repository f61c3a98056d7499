# src/todolist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class MutationResult(StrEnum):
    """
    Outcome of a store mutation.

    Notes:
    - REJECTED means the text was blank; nothing changed.
    - NOT_FOUND means the id is not in the collection; nothing changed.
    Neither is an error the caller has to guard against.
    """

    OK = "ok"
    NOT_FOUND = "not_found"
    REJECTED = "rejected"


@dataclass(slots=True, frozen=True)
class Task:
    id: str
    text: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    is_completed: bool = False

    @property
    def sort_key(self) -> str:
        return self.date + self.time


@dataclass(slots=True, frozen=True)
class TaskView:
    """Read-only row handed to the front-end for rendering."""

    position: int
    id: str
    text: str
    stamp: str
    is_completed: bool
    is_editing: bool = False

    @classmethod
    def from_task(cls, task: Task, position: int, *, editing_id: str | None = None) -> TaskView:
        return cls(
            position=position,
            id=task.id,
            text=task.text,
            stamp=f"{task.date} • {task.time}",
            is_completed=task.is_completed,
            is_editing=editing_id is not None and task.id == editing_id,
        )


def is_blank(text: str | None) -> bool:
    return text is None or not text.strip()
