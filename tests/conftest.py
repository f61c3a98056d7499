# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todolist.core.state import AppState
from todolist.tasks.task_store import TaskStore

from .fakes import FakeClock, FakeGateway, SequentialIds


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="todolist-test",
        log_level="DEBUG",
        data_dir=data_dir,
        tasks_path=data_dir / "todo_data.json",
        log_dir=tmp_path / "logs",
        quarantine_corrupt=True,
        json_indent=2,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture()
def store(gateway: FakeGateway) -> TaskStore:
    return TaskStore(on_change=gateway.save, id_factory=SequentialIds())


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, gateway: FakeGateway, clock: FakeClock) -> AppState:
    """
    AppState wired with deterministic fakes.

    The real TaskStore is used; only storage and time are faked.
    """
    return AppState(settings=settings, store=store, gateway=gateway, clock=clock)
