# src/makibot/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import datetime

from ..core.state import AppState
from ..core.zones import zone_name
from ..tasks.errors import IndexOutOfRangeError, InvalidTaskError, PersistenceIOError
from ..tasks.task_models import Deadline, Event, Task, Todo, parse_zoned_datetime
from . import messages

CommandHandler = Callable[[AppState, str], str]

logger = logging.getLogger(__name__)

_BY_RE = re.compile(r"\s*/by(?:\s+|$)")
_AT_RE = re.compile(r"\s*/at(?:\s+|$)")


class CommandRegistry:
    """Command-word registry used by connectors (todo, list, done, ...)."""

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
        Handle a line like "deadline return book /by 2024-03-01T18:00".
        Returns a reply string, or None for an empty line.
        """
        line = line.strip()
        if not line:
            return None

        name, _, args = line.partition(" ")
        name = name.lower()

        handler = self._handlers.get(name)
        if not handler:
            return messages.error(f"I don't know what '{name}' means. Use help to list available commands.")

        return handler(state, args.strip())

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def persist(state: AppState) -> str:
    """Rewrite the save file after a mutation; returns the save-outcome line."""
    try:
        state.store.save(state.task_list.all())
    except PersistenceIOError:
        logger.exception("Failed to save tasks to %s", state.store.path)
        return messages.save_outcome(False)
    return messages.save_outcome(True)


def _add(state: AppState, task: Task) -> str:
    size = state.task_list.add(task)
    logger.info("Added %s task (size=%d)", task.task_type.name.lower(), size)
    return f"{messages.task_added(task, size)}\n{persist(state)}"


def _parse_index(args: str) -> int | None:
    try:
        return int(args.split()[0]) if args else None
    except ValueError:
        return None


def cmd_help(state: AppState, args: str) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: str) -> str:
    return messages.task_listing(state.task_list.all())


def cmd_todo(state: AppState, args: str) -> str:
    try:
        task = Todo(args)
    except InvalidTaskError as e:
        return messages.error(str(e))
    return _add(state, task)


def _zoned(state: AppState, text: str) -> datetime:
    """Parse a typed date-time and show it in the display zone, as a reload would."""
    try:
        return parse_zoned_datetime(text, state.display_zone).astimezone(state.display_zone)
    except OverflowError as e:
        raise InvalidTaskError(f"'{text}' is out of range.") from e


def cmd_deadline(state: AppState, args: str) -> str:
    """
    deadline <description> /by <date-time>
    The date-time is ISO-8601; without an offset it is read in the display zone.
    """
    parts = _BY_RE.split(args, maxsplit=1)
    if len(parts) != 2:
        return messages.error("Usage: deadline <description> /by <date-time>")
    try:
        task = Deadline(parts[0], _zoned(state, parts[1]))
    except InvalidTaskError as e:
        return messages.error(str(e))
    return _add(state, task)


def cmd_event(state: AppState, args: str) -> str:
    """
    event <description> /at <date-time>
    Same date-time rules as deadline.
    """
    parts = _AT_RE.split(args, maxsplit=1)
    if len(parts) != 2:
        return messages.error("Usage: event <description> /at <date-time>")
    try:
        task = Event(parts[0], _zoned(state, parts[1]))
    except InvalidTaskError as e:
        return messages.error(str(e))
    return _add(state, task)


def _run_indexed(
    state: AppState,
    args: str,
    usage: str,
    action: Callable[[int], Task],
    reply: Callable[[Task], str],
) -> str:
    index = _parse_index(args)
    if index is None:
        return messages.error(f"Usage: {usage}")
    try:
        task = action(index)
    except IndexOutOfRangeError as e:
        logger.debug("Index out of range: %s", e)
        return messages.error(str(e))
    return f"{reply(task)}\n{persist(state)}"


def cmd_done(state: AppState, args: str) -> str:
    return _run_indexed(state, args, "done <task number>", state.task_list.mark_done, messages.task_done)


def cmd_undone(state: AppState, args: str) -> str:
    return _run_indexed(
        state, args, "undone <task number>", state.task_list.mark_undone, messages.task_undone
    )


def cmd_delete(state: AppState, args: str) -> str:
    return _run_indexed(
        state,
        args,
        "delete <task number>",
        state.task_list.delete,
        lambda task: messages.task_deleted(task, state.task_list.size()),
    )


def cmd_timezone(state: AppState, args: str) -> str:
    return f"Dates are shown in timezone {zone_name(state.display_zone)}."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="List all tasks.", aliases=["ls"])
registry.register("todo", cmd_todo, help_text="Add a to-do: todo <description>.")
registry.register(
    "deadline",
    cmd_deadline,
    help_text="Add a deadline: deadline <description> /by 2024-03-01T09:00+08:00.",
)
registry.register(
    "event", cmd_event, help_text="Add an event: event <description> /at 2024-03-01 19:30."
)
registry.register("done", cmd_done, help_text="Mark a task as done: done <n>.", aliases=["mark"])
registry.register(
    "undone", cmd_undone, help_text="Mark a task as not done: undone <n>.", aliases=["unmark"]
)
registry.register("delete", cmd_delete, help_text="Delete a task: delete <n>.", aliases=["remove"])
registry.register("timezone", cmd_timezone, help_text="Show the display timezone.", aliases=["tz"])
