# tests/test_bootstrap.py

from __future__ import annotations

import json

from todolist.cli.bootstrap import create_initial_state
from todolist.tasks import task_api
from todolist.tasks.task_models import Task

from .fakes import FakeClock, SequentialIds


def test_first_run_starts_empty_and_creates_dirs(settings) -> None:
    state = create_initial_state(settings=settings, clock=FakeClock())

    assert len(state.store) == 0
    assert settings.data_dir.is_dir()
    assert not settings.tasks_path.exists()


def test_every_mutation_is_persisted(settings) -> None:
    state = create_initial_state(settings=settings, clock=FakeClock(), id_factory=SequentialIds())

    task = task_api.add_task(state, "Buy milk")
    assert task is not None
    data = json.loads(settings.tasks_path.read_text("utf-8"))
    assert [r["text"] for r in data["tasks"]] == ["Buy milk"]

    task_api.set_completed(state, task.id, True)
    data = json.loads(settings.tasks_path.read_text("utf-8"))
    assert data["tasks"][0]["isCompleted"] is True

    task_api.delete_task(state, task.id)
    data = json.loads(settings.tasks_path.read_text("utf-8"))
    assert data["tasks"] == []


def test_state_survives_restart(settings) -> None:
    clock = FakeClock()
    first = create_initial_state(settings=settings, clock=clock)
    task_api.add_task(first, "Buy milk")
    task_api.add_task(first, "Call dentist")
    b = first.store.list()[1]
    task_api.update_task(first, b.id, "Call the dentist")

    second = create_initial_state(settings=settings, clock=clock)

    assert second.store.list() == first.store.list()
    assert [t.text for t in second.store.list()] == ["Buy milk", "Call the dentist"]


def test_corrupt_snapshot_starts_empty_and_is_kept_aside(settings) -> None:
    settings.tasks_path.parent.mkdir(parents=True)
    settings.tasks_path.write_text("[{\"id\": ", "utf-8")

    state = create_initial_state(settings=settings, clock=FakeClock())

    assert len(state.store) == 0
    assert list(settings.tasks_path.parent.glob("todo_data.json.corrupt-*"))


def test_legacy_snapshot_is_upgraded_on_next_save(settings) -> None:
    settings.tasks_path.parent.mkdir(parents=True)
    settings.tasks_path.write_text(
        json.dumps([{"id": "legacy", "text": "Old", "date": "2023-01-01", "time": "07:00", "isCompleted": False}]),
        "utf-8",
    )

    state = create_initial_state(settings=settings, clock=FakeClock())
    assert state.store.list() == [Task(id="legacy", text="Old", date="2023-01-01", time="07:00")]

    task_api.add_task(state, "New")
    data = json.loads(settings.tasks_path.read_text("utf-8"))
    assert data["version"] == 1
    assert [r["id"] for r in data["tasks"]][0] == "legacy"
