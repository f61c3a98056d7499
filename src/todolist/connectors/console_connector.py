# src/todolist/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import format_task_list
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks import task_api
from ..tasks.task_models import MutationResult

logger = logging.getLogger(__name__)

ReadLine = Callable[[str], str]
Write = Callable[[str], None]


def _prompt(state: AppState) -> str:
    target = task_api.current_edit_target(state)
    if target is not None:
        return f"edit [{target.text}] > "
    return "> "


def _default_write(text: str) -> None:
    print(text, flush=True)


def handle_line(state: AppState, line: str, write: Write = _default_write) -> bool:
    """
    Process one line of user input.

    Returns True if the task list or the edit target changed.
    """
    if line.startswith("/"):
        before = (state.store.snapshot(), state.editing_id)
        try:
            reply = command_registry.handle(state, line, emit=write)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."
        if reply is not None:
            write(reply)
        return (state.store.snapshot(), state.editing_id) != before

    result = task_api.submit_text(state, line)
    if result is MutationResult.NOT_FOUND:
        write("The task you were editing no longer exists.")
    return result is not MutationResult.REJECTED


def run_console_loop(
    state: AppState,
    *,
    read_line: ReadLine = input,
    write: Write = _default_write,
) -> None:
    logger.info("Console connector started (tasks=%s).", len(state.store))
    write("Type a task and press Enter to add it. Use /help for commands. Use /exit to quit.\n")
    write(format_task_list(state))

    while True:
        try:
            user_input = read_line(_prompt(state)).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit", "/q"):
            logger.info("Console exit command received.")
            break

        if handle_line(state, user_input, write):
            write(format_task_list(state))

    logger.info("Console connector finished.")
