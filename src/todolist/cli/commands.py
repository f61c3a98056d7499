# src/todolist/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks import task_api
from ..tasks.task_models import MutationResult, TaskView

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler4 = Callable[[AppState, list[str], CommandEmitter | None, str], str]
CommandHandler = CommandHandler2 | CommandHandler3 | CommandHandler4

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]
        # raw text after the command name, inner whitespace kept as typed
        rest = line[1:].lstrip()[len(parts[0]) :].lstrip()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 4

        if nparams >= 4:
            h4 = cast(CommandHandler4, handler)
            return h4(state, args, emit, rest)

        if nparams == 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Anything else you type is added as a task (or replaces the text being edited).")
        return "\n".join(lines)


registry = CommandRegistry()


def format_task_line(view: TaskView) -> str:
    mark = "[x]" if view.is_completed else "[ ]"
    editing = " *" if view.is_editing else ""
    return f"{view.position:>3}. {mark} {view.text}   ({view.stamp}){editing}"


def format_task_list(state: AppState) -> str:
    views = task_api.task_views(state)
    today, _ = task_api.now_stamp(state.clock)
    lines = [f"My Tasks  ({today})"]
    if not views:
        lines.append("  (no tasks yet)")
    else:
        lines.extend(format_task_line(v) for v in views)
    return "\n".join(lines)


def _describe(result: MutationResult, ref: str, ok_text: str) -> str:
    if result is MutationResult.OK:
        return ok_text
    if result is MutationResult.NOT_FOUND:
        return f"No task {ref}."
    return "Task text cannot be blank."


def _require_ref(state: AppState, args: list[str]) -> tuple[str | None, str]:
    if not args:
        return None, ""
    ref = args[0]
    return task_api.resolve_ref(state, ref), ref


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return format_task_list(state)


def cmd_add(
    state: AppState, args: list[str], emit: CommandEmitter | None = None, rest: str = ""
) -> str:
    task = task_api.add_task(state, rest)
    if task is None:
        return "Task text cannot be blank."
    return f"Added: {task.text}"


def cmd_edit(
    state: AppState, args: list[str], emit: CommandEmitter | None = None, rest: str = ""
) -> str:
    """
    /edit <ref>          -> start editing; the next plain line replaces the text
    /edit <ref> <text>   -> replace the text right away
    """
    if not args:
        return "Usage: /edit <n> [new text]"

    task_id, ref = _require_ref(state, args)
    if task_id is None:
        return f"No task {ref}."

    parts = rest.split(None, 1)
    new_text = parts[1] if len(parts) > 1 else ""
    if new_text:
        result = task_api.update_task(state, task_id, new_text)
        return _describe(result, ref, f"Updated task {ref}.")

    task = task_api.begin_edit(state, task_id)
    if task is None:
        return f"No task {ref}."
    logger.debug("Edit started id=%s", task_id)
    if emit:
        emit(f"Current text: {task.text}")
    return "Editing. Type the new text, or /cancel."


def cmd_cancel(state: AppState, args: list[str]) -> str:
    if task_api.current_edit_target(state) is None:
        return "Not editing anything."
    task_api.cancel_edit(state)
    return "Edit cancelled."


def _completion_command(completed: bool | None) -> CommandHandler2:
    def handler(state: AppState, args: list[str]) -> str:
        if not args:
            return "Usage: /done <n> | /undone <n> | /toggle <n>"
        task_id, ref = _require_ref(state, args)
        if task_id is None:
            return f"No task {ref}."
        if completed is None:
            result = task_api.toggle_completed(state, task_id)
        else:
            result = task_api.set_completed(state, task_id, completed)
        task = state.store.get(task_id)
        state_txt = "done" if task is not None and task.is_completed else "open"
        return _describe(result, ref, f"Task {ref} is now {state_txt}.")

    return handler


def cmd_rm(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /rm <n>"
    task_id, ref = _require_ref(state, args)
    if task_id is None:
        return f"No task {ref}."
    result = task_api.delete_task(state, task_id)
    return _describe(result, ref, f"Deleted task {ref}.")


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.store
    target = task_api.current_edit_target(state)
    editing = target.text if target is not None else "-"
    path = getattr(state.gateway, "path", None)
    return (
        "Status:\n"
        f"  Tasks: {len(store)} ({store.count_completed()} done)\n"
        f"  Editing: {editing}\n"
        f"  Data file: {path if path is not None else '-'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <text>.")
registry.register(
    "edit", cmd_edit, help_text="Edit task text: /edit <n> [new text].", aliases=["e"]
)
registry.register("cancel", cmd_cancel, help_text="Stop editing without changes.")
registry.register(
    "done", _completion_command(True), help_text="Mark a task completed: /done <n>.", aliases=["x"]
)
registry.register("undone", _completion_command(False), help_text="Mark a task open again: /undone <n>.")
registry.register("toggle", _completion_command(None), help_text="Flip completion: /toggle <n>.", aliases=["t"])
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <n>.", aliases=["del", "delete"])
registry.register("status", cmd_status, help_text="Show task counts and the data file path.")
