# src/makibot/tasks/errors.py

from __future__ import annotations

from pathlib import Path


class TaskError(Exception):
    """Base class for task-related errors."""


class InvalidTaskError(TaskError, ValueError):
    """A task could not be constructed (empty description, bad timestamp)."""


class MalformedRecordError(TaskError, ValueError):
    """A save-file line could not be parsed. Only raised inside the loader."""

    def __init__(self, reason: str, *, line: str = "", line_no: int = 0) -> None:
        super().__init__(reason)
        self.reason = reason
        self.line = line
        self.line_no = line_no


class IndexOutOfRangeError(TaskError, IndexError):
    def __init__(self, index: int, size: int) -> None:
        if size == 0:
            msg = f"Task {index} does not exist, the list is empty."
        else:
            msg = f"Task {index} does not exist, pick a number from 1 to {size}."
        super().__init__(msg)
        self.index = index
        self.size = size


class PersistenceIOError(TaskError):
    """Reading or writing the save file failed. `cause` holds the OSError."""

    def __init__(self, path: str | Path, cause: BaseException) -> None:
        super().__init__(f"Save file {path} is not accessible: {cause}")
        self.path = Path(path)
        self.cause = cause
