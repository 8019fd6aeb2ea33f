# src/tasktrack/cli/commands.py

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable

from ..core.state import AppState
from ..tasks.task_models import PRIORITY_MAX, PRIORITY_MIN, normalize_priority

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

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
        Handle a string like '/command arg "quoted arg"'.
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Could not parse command: {e}."
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


class UsageError(ValueError):
    pass


def _int_arg(raw: str, what: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise UsageError(f"{what} must be a whole number, got {raw!r}.") from None


def _priority_arg(raw: str) -> tuple[int, str]:
    """Parse a priority; out-of-range values become 'no priority' with a note."""
    value = _int_arg(raw, "Priority")
    prio = normalize_priority(value)
    if prio != value:
        return prio, " Priority set to 'no priority'."
    return prio, ""


ADD_USAGE = 'Usage: /add "<description>" <category> <priority 1-5> <hours until due>'
EDIT_USAGE = (
    "Usage:\n"
    '  /edit <id> all "<description>" <category> <priority> <hours>\n'
    '  /edit <id> desc "<description>"\n'
    "  /edit <id> category <category>\n"
    "  /edit <id> priority <1-5>\n"
    "  /edit <id> due <hours from now>"
)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    if len(args) != 4:
        return ADD_USAGE
    desc, cat, raw_prio, raw_hours = args
    try:
        prio, note = _priority_arg(raw_prio)
        hours = _int_arg(raw_hours, "Hours")
    except UsageError as e:
        return f"{e} {ADD_USAGE}"

    task_id = state.manager.add_task(desc, cat, prio, hours)
    return f"Task {task_id} added.{note}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id> all "<desc>" <cat> <prio> <hours>
    /edit <id> desc|category|priority|due <value>
    """
    if len(args) < 3:
        return EDIT_USAGE

    try:
        task_id = _int_arg(args[0], "Task id")
    except UsageError as e:
        return f"{e}\n{EDIT_USAGE}"
    field_name = args[1].lower()
    rest = args[2:]
    manager = state.manager
    note = ""

    try:
        if field_name == "all":
            if len(rest) != 4:
                return EDIT_USAGE
            desc, cat, raw_prio, raw_hours = rest
            prio, note = _priority_arg(raw_prio)
            found = manager.edit_task(task_id, desc, cat, prio, _int_arg(raw_hours, "Hours"))
        elif len(rest) != 1:
            return EDIT_USAGE
        elif field_name in ("desc", "description"):
            found = manager.edit_description(task_id, rest[0])
        elif field_name in ("cat", "category"):
            found = manager.edit_category(task_id, rest[0])
        elif field_name in ("prio", "priority"):
            prio, note = _priority_arg(rest[0])
            found = manager.edit_priority(task_id, prio)
        elif field_name in ("due", "hours"):
            found = manager.edit_due_date(task_id, _int_arg(rest[0], "Hours"))
        else:
            return f"Unknown field {field_name!r}. No changes made.\n{EDIT_USAGE}"
    except UsageError as e:
        return f"{e}\n{EDIT_USAGE}"

    if not found:
        return f"Task id {task_id} not found."
    return f"Task {task_id} updated.{note}"


def _id_command(args: list[str], usage: str) -> int | str:
    if len(args) != 1:
        return usage
    try:
        return _int_arg(args[0], "Task id")
    except UsageError as e:
        return f"{e} {usage}"


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _id_command(args, "Usage: /delete <id>")
    if isinstance(task_id, str):
        return task_id
    if not state.manager.delete_task(task_id):
        return f"Task id {task_id} not found."
    return f"Task {task_id} removed."


def cmd_done(state: AppState, args: list[str]) -> str:
    task_id = _id_command(args, "Usage: /done <id>")
    if isinstance(task_id, str):
        return task_id
    if not state.manager.mark_complete(task_id):
        return f"Task id {task_id} not found."
    return f"Task {task_id} marked as complete."


def cmd_show(state: AppState, args: list[str]) -> str:
    task_id = _id_command(args, "Usage: /show <id>")
    if isinstance(task_id, str):
        return task_id
    task = state.manager.get_task(task_id)
    if task is None:
        return f"Task id {task_id} not found."
    return task.display()


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = state.manager.list_all()
    if not tasks:
        return "No tasks to display."
    return "\n".join(t.display() for t in tasks)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "add",
    cmd_add,
    help_text=f'Add a task: /add "<description>" <category> <priority {PRIORITY_MIN}-{PRIORITY_MAX}> <hours>.',
)
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> all|desc|category|priority|due ...")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm", "del"])
registry.register("done", cmd_done, help_text="Mark a task as complete: /done <id>.", aliases=["complete"])
registry.register("list", cmd_list, help_text="Display all tasks.", aliases=["ls"])
registry.register("show", cmd_show, help_text="Display one task: /show <id>.")
