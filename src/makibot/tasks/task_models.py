# src/makibot/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import StrEnum
from typing import ClassVar

from ..core.zones import format_human
from .errors import InvalidTaskError

# Zone id appended by older save files: 2024-03-01T09:00+08:00[Asia/Singapore]
_ZONE_ID_SUFFIX = re.compile(r"\[[^\]]*\]$")


class TaskType(StrEnum):
    """Single-character tag identifying a task variant in a record."""

    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


def parse_zoned_datetime(text: str, default_zone: tzinfo | None = None) -> datetime:
    """
    Parse an ISO-8601 date-time carrying a UTC offset.

    A value without an offset is accepted only when `default_zone` is given
    (user input), and is then interpreted in that zone.
    """
    raw = _ZONE_ID_SUFFIX.sub("", (text or "").strip())
    if not raw:
        raise InvalidTaskError("The date/time is missing.")
    try:
        dt = datetime.fromisoformat(raw)
    except ValueError as e:
        raise InvalidTaskError(f"'{text}' is not a valid date/time (e.g. 2024-03-01T09:00+08:00).") from e

    if dt.tzinfo is None or dt.utcoffset() is None:
        if default_zone is None:
            raise InvalidTaskError(f"'{text}' has no timezone offset.")
        dt = dt.replace(tzinfo=default_zone)
    return dt


def _check_description(description: str) -> None:
    if not isinstance(description, str) or not description.strip():
        raise InvalidTaskError("The description of a task cannot be empty.")


def _check_zoned(value: datetime, label: str) -> None:
    if not isinstance(value, datetime) or value.tzinfo is None or value.utcoffset() is None:
        raise InvalidTaskError(f"The '{label}' time must be a zoned date-time.")


@dataclass(slots=True)
class _TaskBase:
    description: str
    is_done: bool = False

    task_type: ClassVar[TaskType]

    def __post_init__(self) -> None:
        _check_description(self.description)

    def __setattr__(self, name: str, value: object) -> None:
        if name == "description" and hasattr(self, "description"):
            raise AttributeError("description cannot be changed once the task exists")
        object.__setattr__(self, name, value)

    @property
    def status_icon(self) -> str:
        return "X" if self.is_done else " "

    def mark_as_done(self) -> None:
        self.is_done = True

    def mark_as_undone(self) -> None:
        self.is_done = False

    def render(self) -> str:
        return f"[{self.task_type}][{self.status_icon}] {self.description}"

    def to_record_fields(self) -> list[str]:
        return [str(self.task_type), "true" if self.is_done else "false", self.description]

    def __str__(self) -> str:
        return self.render()


@dataclass(slots=True)
class Todo(_TaskBase):
    task_type: ClassVar[TaskType] = TaskType.TODO


@dataclass(slots=True, init=False)
class Deadline(_TaskBase):
    by: datetime

    task_type: ClassVar[TaskType] = TaskType.DEADLINE

    def __init__(self, description: str, by: datetime, is_done: bool = False) -> None:
        self.description = description
        self.by = by
        self.is_done = is_done
        self.__post_init__()

    def __post_init__(self) -> None:
        _check_description(self.description)
        _check_zoned(self.by, "by")

    @classmethod
    def from_text(
        cls, description: str, by: str, *, default_zone: tzinfo | None = None, is_done: bool = False
    ) -> Deadline:
        return cls(description, parse_zoned_datetime(by, default_zone), is_done=is_done)

    def render(self) -> str:
        return f"{_TaskBase.render(self)} (by: {format_human(self.by)})"

    def to_record_fields(self) -> list[str]:
        return [*_TaskBase.to_record_fields(self), self.by.isoformat()]


@dataclass(slots=True, init=False)
class Event(_TaskBase):
    at: datetime

    task_type: ClassVar[TaskType] = TaskType.EVENT

    def __init__(self, description: str, at: datetime, is_done: bool = False) -> None:
        self.description = description
        self.at = at
        self.is_done = is_done
        self.__post_init__()

    def __post_init__(self) -> None:
        _check_description(self.description)
        _check_zoned(self.at, "at")

    @classmethod
    def from_text(
        cls, description: str, at: str, *, default_zone: tzinfo | None = None, is_done: bool = False
    ) -> Event:
        return cls(description, parse_zoned_datetime(at, default_zone), is_done=is_done)

    def render(self) -> str:
        return f"{_TaskBase.render(self)} (at: {format_human(self.at)})"

    def to_record_fields(self) -> list[str]:
        return [*_TaskBase.to_record_fields(self), self.at.isoformat()]


# Closed variant set: the codec dispatches on TaskType over exactly these.
Task = Todo | Deadline | Event
