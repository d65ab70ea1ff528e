# src/taskkeeper/cli/commands.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from ..assignees.directory import Assignee, AssigneeDirectoryError
from ..core.state import AppState
from ..storage.kv_store import StorageWriteError
from ..tasks.due_dates import format_due_date, is_past_due, parse_due_date
from ..tasks.task_api import create_task, toggle_completed
from ..tasks.task_models import Task

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

FIELD_SEP = "|"


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /list, ...)."""

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

    def handle(self, state: AppState, line: str) -> str | None:
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

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def _split_fields(args: list[str]) -> list[str]:
    return [p.strip() for p in " ".join(args).split(FIELD_SEP)]


def _parse_number(raw: str) -> int | None:
    """1-based number shown in /list -> 0-based index (None if not a number)."""
    try:
        n = int(raw)
    except ValueError:
        return None
    return n - 1 if n >= 1 else None


def _assignees(state: AppState, *, refresh: bool = False) -> list[Assignee]:
    if state.assignee_cache is None or refresh:
        state.assignee_cache = asyncio.run(state.assignees.list_assignees())
    return state.assignee_cache


def _resolve_assignee(state: AppState, name: str) -> str | dict:
    """Directory record when the name is known, else the plain name."""
    try:
        known = _assignees(state)
    except AssigneeDirectoryError:
        logger.warning("Assignee directory unavailable; storing plain name %r", name)
        return name
    for a in known:
        if a.name.lower() == name.lower():
            return a.to_record()
    return name


def format_task_line(number: int, task: Task) -> str:
    mark = "x" if task.completed else " "
    line = f"{number:>3}. [{mark}] {task.description} | {task.assignee_name or '-'} | {format_due_date(task.due_date)}"
    if not task.completed and is_past_due(task.due_date):
        line += "  OVERDUE"
    return line


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    result = state.task_store.load()
    backend = getattr(state.settings, "storage_backend", "?")
    return (
        "Status:\n"
        f"  Storage: {backend} (key={state.task_store.key})\n"
        f"  Slot: {result.status.value}\n"
        f"  Tasks: {len(result.tasks)}"
    )


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list       -> all tasks
    /list open  -> not completed
    /list done  -> completed
    """
    mode = args[0].lower() if args else "all"
    if mode not in ("all", "open", "done"):
        return "Usage: /list [all|open|done]"

    tasks = state.task_store.list()
    if not tasks:
        return "No tasks. Add one with /add <description> | <assignee> | <due>."

    lines = []
    for i, task in enumerate(tasks, start=1):
        if mode == "open" and task.completed:
            continue
        if mode == "done" and not task.completed:
            continue
        lines.append(format_task_line(i, task))
    return "\n".join(lines) if lines else f"No {mode} tasks."


def cmd_add(state: AppState, args: list[str]) -> str:
    """/add <description> [| <assignee> [| <due>]]"""
    fields = _split_fields(args)
    description = fields[0] if fields else ""
    if not description:
        return "Usage: /add <description> [| <assignee> [| <due>]]"

    assignee_name = fields[1] if len(fields) > 1 else ""
    due_raw = fields[2] if len(fields) > 2 else ""

    try:
        due_date = parse_due_date(due_raw) if due_raw else None
    except ValueError as e:
        return f"Bad due date: {e}"

    assignee = _resolve_assignee(state, assignee_name) if assignee_name else None

    try:
        task = asyncio.run(
            create_task(
                state.task_store,
                state.assignees,
                description=description,
                assignee=assignee,
                due_date=due_date,
            )
        )
    except AssigneeDirectoryError as e:
        logger.warning("Cannot pick a default assignee: %s", e)
        return "Assignee directory unavailable; give an assignee explicitly: /add <description> | <assignee>"
    except StorageWriteError:
        logger.exception("Saving new task failed.")
        return "Could not save the task (storage error). Nothing was added."

    return f"Added: {task.description} ({format_due_date(task.due_date)})"


def cmd_edit(state: AppState, args: list[str]) -> str:
    """/edit <N> <description> | <assignee> | <due>  (blank fields keep the old value)"""
    usage = "Usage: /edit <N> <description> | <assignee> | <due>"
    if not args:
        return usage

    index = _parse_number(args[0])
    if index is None:
        return usage

    current = state.task_store.get_by_index(index)
    if current is None:
        return f"No task #{args[0]}."

    fields = _split_fields(args[1:]) + ["", "", ""]
    description, assignee_name, due_raw = fields[0], fields[1], fields[2]

    try:
        due_date = parse_due_date(due_raw) if due_raw else current.due_date
    except ValueError as e:
        return f"Bad due date: {e}"

    updated = Task(
        description=description or current.description,
        assignee=_resolve_assignee(state, assignee_name) if assignee_name else current.assignee,
        due_date=due_date,
        completed=current.completed,
        id=current.id,
        extra=current.extra,
    )

    try:
        state.task_store.edit_at(index, updated)
    except IndexError:
        return f"No task #{args[0]}."
    except StorageWriteError:
        logger.exception("Saving edited task failed index=%s", index)
        return "Could not save the change (storage error)."

    return f"Updated #{index + 1}: {updated.description}"


def cmd_done(state: AppState, args: list[str]) -> str:
    """/done <N> -> toggle completed"""
    if not args:
        return "Usage: /done <N>"
    index = _parse_number(args[0])
    if index is None:
        return "Usage: /done <N>"

    try:
        task = toggle_completed(state.task_store, index)
    except IndexError:
        return f"No task #{args[0]}."
    except StorageWriteError:
        logger.exception("Saving completed flag failed index=%s", index)
        return "Could not save the change (storage error)."

    return f"#{index + 1} {'completed' if task.completed else 'reopened'}: {task.description}"


def cmd_remove(state: AppState, args: list[str]) -> str:
    """
    /remove <N>      -> ask for confirmation
    /remove <N> yes  -> remove
    """
    if not args:
        return "Usage: /remove <N> [yes]"
    index = _parse_number(args[0])
    if index is None:
        return "Usage: /remove <N> [yes]"

    task = state.task_store.get_by_index(index)
    if task is None:
        return f"No task #{args[0]}."

    confirmed = len(args) > 1 and args[1].lower() in ("yes", "y")
    if not confirmed:
        return f"Would you like to remove this task? \"{task.description}\"  Repeat with: /remove {index + 1} yes"

    try:
        state.task_store.remove_at(index)
    except StorageWriteError:
        logger.exception("Removing task failed index=%s", index)
        return "Could not remove the task (storage error)."

    return f"Removed: {task.description}"


def cmd_assignees(state: AppState, args: list[str]) -> str:
    try:
        known = _assignees(state, refresh=True)
    except AssigneeDirectoryError as e:
        logger.warning("Assignee directory unavailable: %s", e)
        return "Assignee directory unavailable."
    if not known:
        return "No assignees."
    return "Assignees:\n" + "\n".join(f"  {i}. {a.name}" for i, a in enumerate(known, start=1))


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="List tasks: /list [all|open|done].", aliases=["ls"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add <description> | <assignee> | <due>.", aliases=["new"]
)
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <N> <description> | <assignee> | <due>.")
registry.register("done", cmd_done, help_text="Toggle completed: /done <N>.", aliases=["toggle"])
registry.register("remove", cmd_remove, help_text="Remove a task: /remove <N> yes.", aliases=["rm"])
registry.register("assignees", cmd_assignees, help_text="Show the assignee directory.")
registry.register("status", cmd_status, help_text="Show storage backend, key and task count.")
