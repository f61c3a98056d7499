# src/todolist/tasks/task_api.py

from __future__ import annotations

import logging

from ..core.ports import Clock
from ..core.state import AppState
from .task_models import MutationResult, Task, TaskView, is_blank

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
MIN_ID_PREFIX = 4


def now_stamp(clock: Clock) -> tuple[str, str]:
    """Return (date, time) for "now" as zero-padded ISO strings."""
    now = clock()
    return now.strftime(DATE_FORMAT), now.strftime(TIME_FORMAT)


def add_task(state: AppState, text: str) -> Task | None:
    date, time = now_stamp(state.clock)
    task = state.store.add(text, date, time)
    if task is not None:
        logger.debug("Added task id=%s", task.id)
    return task


def current_edit_target(state: AppState) -> Task | None:
    """
    Task currently being edited, or None.

    A target whose id is gone from the store is stale and gets cleared here.
    """
    if state.editing_id is None:
        return None
    task = state.store.get(state.editing_id)
    if task is None:
        logger.debug("Edit target %s no longer exists; clearing.", state.editing_id)
        state.editing_id = None
    return task


def begin_edit(state: AppState, task_id: str) -> Task | None:
    task = state.store.get(task_id)
    if task is None:
        return None
    state.editing_id = task.id
    return task


def cancel_edit(state: AppState) -> None:
    state.editing_id = None


def submit_text(state: AppState, text: str) -> MutationResult:
    """
    Single "submit" action of the input line.

    No edit target: add a new task stamped with now.
    Edit target set: replace that task's text, then clear the target.
    Blank text is rejected and leaves the edit target in place.
    """
    if is_blank(text):
        return MutationResult.REJECTED

    target = current_edit_target(state)
    if target is None:
        return MutationResult.OK if add_task(state, text) is not None else MutationResult.REJECTED

    result = state.store.update(target.id, text)
    if result is not MutationResult.REJECTED:
        state.editing_id = None
    return result


def update_task(state: AppState, task_id: str, text: str) -> MutationResult:
    result = state.store.update(task_id, text)
    if result is MutationResult.OK and state.editing_id == task_id:
        state.editing_id = None
    return result


def set_completed(state: AppState, task_id: str, completed: bool) -> MutationResult:
    return state.store.set_completed(task_id, completed)


def toggle_completed(state: AppState, task_id: str) -> MutationResult:
    task = state.store.get(task_id)
    if task is None:
        return MutationResult.NOT_FOUND
    return state.store.set_completed(task_id, not task.is_completed)


def delete_task(state: AppState, task_id: str) -> MutationResult:
    result = state.store.remove(task_id)
    if state.editing_id == task_id:
        state.editing_id = None
    return result


def task_views(state: AppState) -> list[TaskView]:
    target = current_edit_target(state)
    editing_id = target.id if target is not None else None
    return [
        TaskView.from_task(t, pos, editing_id=editing_id)
        for pos, t in enumerate(state.store.list(), start=1)
    ]


def resolve_ref(state: AppState, ref: str) -> str | None:
    """
    Map a user reference to a task id.

    Accepted forms:
    - 1-based position in the display order ("3")
    - a unique id prefix of at least MIN_ID_PREFIX characters
    """
    ref = (ref or "").strip()
    if not ref:
        return None

    ordered = state.store.list()
    if ref.isdigit():
        pos = int(ref)
        if 1 <= pos <= len(ordered):
            return ordered[pos - 1].id
        # out of range: may still be an all-digit id prefix

    if len(ref) < MIN_ID_PREFIX:
        return None
    matches = [t.id for t in ordered if t.id.startswith(ref)]
    return matches[0] if len(matches) == 1 else None
