# src/makibot/cli/messages.py

"""User-facing reply strings. Plain text only; connectors print them as-is."""

from __future__ import annotations

from collections.abc import Sequence

from ..tasks.task_codec import LoadResult, LoadStatus
from ..tasks.task_models import Task


def greeting(app_name: str) -> str:
    return f"Hello! I'm {app_name}\nWhat can I do for you?"


def goodbye() -> str:
    return "Bye. Hope to see you again soon!"


def task_added(task: Task, size: int) -> str:
    return f"Got it. I've added this task:\n\t{task.render()}\nNow you have {size} tasks in the list."


def task_listing(tasks: Sequence[Task]) -> str:
    if not tasks:
        return "You have no tasks at the moment!"
    lines = ["Here are the tasks in your list:"]
    for i, task in enumerate(tasks, start=1):
        lines.append(f"{i}. {task.render()}")
    return "\n".join(lines)


def task_done(task: Task) -> str:
    return f"Nice! I've marked this task as done:\n\t{task.render()}"


def task_undone(task: Task) -> str:
    return f"OK, I've marked this task as not done yet:\n\t{task.render()}"


def task_deleted(task: Task, size: int) -> str:
    return f"Noted. I've removed this task:\n\t{task.render()}\nNow you have {size} tasks in the list."


def load_summary(result: LoadResult) -> str:
    if result.status is LoadStatus.NO_SAVE_FILE:
        return "No tasks to load."
    if result.status is LoadStatus.UNREADABLE:
        return "Could not read the save file, starting with no tasks."

    msg = f"{result.loaded_count} task(s) successfully loaded!"
    if result.skipped_count:
        lines = [msg, f"{result.skipped_count} line(s) could not be loaded from memory:"]
        lines.extend(f"  line {d.line_no}: {d.line}" for d in result.diagnostics)
        msg = "\n".join(lines)
    return msg


def save_outcome(ok: bool) -> str:
    if ok:
        return "Tasks saved successfully!"
    return "An error occurred while saving your tasks."


def error(text: str) -> str:
    return f"OOPS!!! {text}"
