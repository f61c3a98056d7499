# src/todolist/tasks/task_store.py

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from dataclasses import replace

from .task_models import MutationResult, Task, is_blank

logger = logging.getLogger(__name__)

ChangeListener = Callable[[list[Task]], object]
IdFactory = Callable[[], str]


def _uuid_id() -> str:
    return str(uuid.uuid4())


class TaskStore:
    """
    In-memory task list.

    The store owns the authoritative collection (kept in insertion order) and is
    the only place it gets mutated. Callers read through list()/snapshot(), which
    always return fresh lists of immutable Task values.

    Every successful mutation calls on_change(snapshot) exactly once; the
    composition root wires that to the persistence gateway.
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        *,
        on_change: ChangeListener | None = None,
        id_factory: IdFactory | None = None,
    ) -> None:
        self._tasks: list[Task] = list(tasks)
        self._on_change = on_change
        self._id_factory = id_factory or _uuid_id
        self._issued: set[str] = {t.id for t in self._tasks}
        logger.debug("TaskStore ready total=%s", len(self._tasks))

    # ---- low-level helpers ----

    def _index_of(self, task_id: str) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    def _new_id(self) -> str:
        while True:
            task_id = self._id_factory()
            if task_id not in self._issued:
                self._issued.add(task_id)
                return task_id
            logger.warning("Id factory returned a used id %s; drawing again.", task_id)

    def _changed(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(self.snapshot())
        except Exception:
            # The in-memory state stays the source of truth.
            logger.exception("TaskStore change listener failed.")

    # ---- queries ----

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return isinstance(task_id, str) and self._index_of(task_id) is not None

    def get(self, task_id: str) -> Task | None:
        idx = self._index_of(task_id)
        return None if idx is None else self._tasks[idx]

    def snapshot(self) -> list[Task]:
        """Full collection in stored (insertion) order."""
        return list(self._tasks)

    def list(self) -> list[Task]:
        """
        Display order: ascending by date + time compared as plain strings.

        sorted() is stable, so tasks with identical date and time keep their
        insertion order.
        """
        return sorted(self._tasks, key=lambda t: t.sort_key)

    def count_completed(self) -> int:
        return sum(1 for t in self._tasks if t.is_completed)

    # ---- mutations ----

    def add(self, text: str, date: str, time: str) -> Task | None:
        if is_blank(text):
            logger.debug("Add rejected: blank text.")
            return None

        task = Task(id=self._new_id(), text=text, date=date, time=time)
        self._tasks.append(task)
        logger.debug("Task added id=%s date=%s time=%s", task.id, date, time)
        self._changed()
        return task

    def update(self, task_id: str, new_text: str) -> MutationResult:
        if is_blank(new_text):
            logger.debug("Update rejected: blank text id=%s", task_id)
            return MutationResult.REJECTED

        idx = self._index_of(task_id)
        if idx is None:
            logger.debug("Update: task not found id=%s", task_id)
            return MutationResult.NOT_FOUND

        self._tasks[idx] = replace(self._tasks[idx], text=new_text)
        logger.debug("Task text updated id=%s", task_id)
        self._changed()
        return MutationResult.OK

    def set_completed(self, task_id: str, completed: bool) -> MutationResult:
        idx = self._index_of(task_id)
        if idx is None:
            logger.debug("set_completed: task not found id=%s", task_id)
            return MutationResult.NOT_FOUND

        self._tasks[idx] = replace(self._tasks[idx], is_completed=bool(completed))
        logger.debug("Task completion set id=%s completed=%s", task_id, bool(completed))
        self._changed()
        return MutationResult.OK

    def remove(self, task_id: str) -> MutationResult:
        idx = self._index_of(task_id)
        if idx is None:
            logger.debug("Remove: task not found id=%s", task_id)
            return MutationResult.NOT_FOUND

        del self._tasks[idx]
        logger.debug("Task removed id=%s", task_id)
        self._changed()
        return MutationResult.OK
