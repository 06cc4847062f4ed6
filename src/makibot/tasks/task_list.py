# src/makibot/tasks/task_list.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .errors import IndexOutOfRangeError
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskList:
    """
    Ordered, mutable collection of tasks.

    Insertion order is display order and save order. Indices taken by the
    public methods are 1-based (as typed by the user).
    """

    def __init__(self, tasks: Iterable[Task] | None = None) -> None:
        self._tasks: list[Task] = list(tasks or [])

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))

    def size(self) -> int:
        return len(self._tasks)

    def all(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def _position(self, index: int) -> int:
        if not 1 <= index <= len(self._tasks):
            raise IndexOutOfRangeError(index, len(self._tasks))
        return index - 1

    def add(self, task: Task) -> int:
        self._tasks.append(task)
        logger.debug("Task added: %s (size=%d)", task, len(self._tasks))
        return len(self._tasks)

    def mark_done(self, index: int) -> Task:
        task = self._tasks[self._position(index)]
        task.mark_as_done()
        return task

    def mark_undone(self, index: int) -> Task:
        task = self._tasks[self._position(index)]
        task.mark_as_undone()
        return task

    def delete(self, index: int) -> Task:
        task = self._tasks.pop(self._position(index))
        logger.debug("Task removed: %s (size=%d)", task, len(self._tasks))
        return task
