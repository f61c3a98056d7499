# tests/test_console_connector.py

from __future__ import annotations

from collections.abc import Iterator

from todolist.connectors.console_connector import handle_line, run_console_loop
from todolist.core.state import AppState


def _scripted(lines: list[str]):
    it: Iterator[str] = iter(lines)
    prompts: list[str] = []

    def read_line(prompt: str) -> str:
        prompts.append(prompt)
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read_line, prompts


def test_plain_lines_add_tasks(state: AppState) -> None:
    out: list[str] = []

    assert handle_line(state, "Buy milk", out.append) is True
    assert handle_line(state, "   ", out.append) is False

    assert [t.text for t in state.store.list()] == ["Buy milk"]


def test_read_only_commands_do_not_redraw(state: AppState) -> None:
    out: list[str] = []
    assert handle_line(state, "/help", out.append) is False
    assert out and "Available commands" in out[0]


def test_handler_crash_is_reported(state: AppState, monkeypatch) -> None:
    from todolist.cli import commands

    def boom(state, args):
        raise RuntimeError("bug")

    monkeypatch.setitem(commands.registry._handlers, "boom", boom)
    out: list[str] = []

    assert handle_line(state, "/boom", out.append) is False
    assert out == ["Internal error while handling a command."]


def test_session_add_edit_complete_delete(state: AppState) -> None:
    read_line, prompts = _scripted(
        [
            "Buy milk",
            "Call dentist",
            "/edit 2",
            "Call the dentist",
            "/done 1",
            "/rm 2",
            "/exit",
            "never read",
        ]
    )
    out: list[str] = []

    run_console_loop(state, read_line=read_line, write=out.append)

    (task,) = state.store.list()
    assert task.text == "Buy milk"
    assert task.is_completed is True
    assert state.editing_id is None
    assert "edit [Call dentist] > " in prompts
    assert "never read" not in "".join(out)
    assert out[-1].splitlines()[-1] == "  1. [x] Buy milk   (2024-06-01 • 08:00)"


def test_editing_a_deleted_task_falls_back_to_add(state: AppState) -> None:
    out: list[str] = []
    handle_line(state, "Buy milk", out.append)
    handle_line(state, "/edit 1", out.append)
    state.store.remove(state.editing_id)

    handle_line(state, "Fresh task", out.append)

    assert [t.text for t in state.store.list()] == ["Fresh task"]
    assert state.editing_id is None


def test_eof_ends_loop(state: AppState) -> None:
    read_line, _ = _scripted([])
    out: list[str] = []

    run_console_loop(state, read_line=read_line, write=out.append)

    assert "(no tasks yet)" in out[1]
