# src/makibot/tasks/task_codec.py

"""
Save-file codec.

One record per line:

    T | false | buy milk
    D | true | submit report | 2024-03-01T09:00:00+08:00
    E | false | team dinner | 2024-03-02T19:30:00+08:00

Fields are separated by exactly " | ". There is no escaping: a description
containing the separator is written as-is and will not load back. Changing
that would change the file format, so it stays a known limitation.

Loading tolerates damage: a line that cannot be parsed is skipped and reported
as a diagnostic, and the remaining lines still load.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import tzinfo
from enum import StrEnum
from pathlib import Path

from .errors import InvalidTaskError, MalformedRecordError, PersistenceIOError
from .task_models import Deadline, Event, Task, TaskType, Todo, parse_zoned_datetime

logger = logging.getLogger(__name__)

SEPARATOR = " | "

_BOOLEANS = {"true": True, "false": False}


class LoadStatus(StrEnum):
    LOADED = "loaded"
    NO_SAVE_FILE = "no_save_file"
    UNREADABLE = "unreadable"


@dataclass(slots=True, frozen=True)
class RecordDiagnostic:
    line_no: int
    line: str
    reason: str


@dataclass(slots=True)
class LoadResult:
    tasks: list[Task]
    status: LoadStatus
    diagnostics: list[RecordDiagnostic] = field(default_factory=list)

    @property
    def loaded_count(self) -> int:
        return len(self.tasks)

    @property
    def skipped_count(self) -> int:
        return len(self.diagnostics)

    @property
    def file_found(self) -> bool:
        return self.status is not LoadStatus.NO_SAVE_FILE


# ---- records ----


def serialize_task(task: Task) -> str:
    return SEPARATOR.join(task.to_record_fields())


def _expect_fields(fields: list[str], count: int, tag: TaskType) -> None:
    if len(fields) != count:
        raise MalformedRecordError(f"'{tag}' record needs {count} fields, got {len(fields)}")


def parse_record(line: str, display_zone: tzinfo) -> Task:
    """Parse one record; raises MalformedRecordError when it is unusable."""
    fields = line.split(SEPARATOR)
    if len(fields) < 3 or not fields[0]:
        raise MalformedRecordError(f"expected at least 3 fields, got {len(fields)}")

    try:
        tag = TaskType(fields[0][0])
    except ValueError:
        raise MalformedRecordError(f"unknown task type '{fields[0]}'") from None

    done = _BOOLEANS.get(fields[1].strip().lower())
    if done is None:
        raise MalformedRecordError(f"done flag must be true or false, got '{fields[1]}'")

    description = fields[2]
    try:
        match tag:
            case TaskType.TODO:
                _expect_fields(fields, 3, tag)
                return Todo(description, is_done=done)
            case TaskType.DEADLINE:
                _expect_fields(fields, 4, tag)
                by = parse_zoned_datetime(fields[3]).astimezone(display_zone)
                return Deadline(description, by, is_done=done)
            case TaskType.EVENT:
                _expect_fields(fields, 4, tag)
                at = parse_zoned_datetime(fields[3]).astimezone(display_zone)
                return Event(description, at, is_done=done)
    except (InvalidTaskError, OverflowError) as e:
        raise MalformedRecordError(str(e)) from e

    raise MalformedRecordError(f"unhandled task type '{tag}'")


def iter_records(
    lines: Iterable[str | bytes],
    display_zone: tzinfo,
    diagnostics: list[RecordDiagnostic],
) -> Iterator[Task]:
    """
    Yield every task that parses; record one diagnostic per skipped line.

    Byte lines are decoded one at a time, so a line with invalid UTF-8 is
    skipped on its own. Blank lines are ignored without a diagnostic.
    """
    for line_no, raw in enumerate(lines, start=1):
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
                diagnostics.append(RecordDiagnostic(line_no=line_no, line=line, reason=f"not UTF-8: {e.reason}"))
                logger.warning("Skipping save file line %d (not UTF-8): %r", line_no, line)
                continue
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        try:
            task = parse_record(line, display_zone)
        except MalformedRecordError as e:
            diag = RecordDiagnostic(line_no=line_no, line=line, reason=e.reason)
            diagnostics.append(diag)
            logger.warning("Skipping save file line %d (%s): %r", line_no, e.reason, line)
            continue
        yield task


# ---- files ----


def load_tasks(path: str | Path, display_zone: tzinfo) -> LoadResult:
    """
    Rehydrate tasks from `path`, converting timestamps to `display_zone`.

    A missing file is the normal first-run state. An unreadable file is logged
    and treated as an empty list so startup always succeeds.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        logger.info("No save file at %s", path)
        return LoadResult(tasks=[], status=LoadStatus.NO_SAVE_FILE)
    except OSError as e:
        logger.error("Save file %s could not be read: %s", path, e)
        return LoadResult(tasks=[], status=LoadStatus.UNREADABLE)

    diagnostics: list[RecordDiagnostic] = []
    tasks = list(iter_records(data.split(b"\n"), display_zone, diagnostics))
    logger.info(
        "Loaded %d task(s) from %s (skipped=%d)", len(tasks), path, len(diagnostics)
    )
    return LoadResult(tasks=tasks, status=LoadStatus.LOADED, diagnostics=diagnostics)


def save_tasks(tasks: Iterable[Task], path: str | Path) -> None:
    """
    Overwrite `path` with one record per task, in order.

    Raises PersistenceIOError on failure; the file may then be truncated.
    """
    path = Path(path)
    lines: list[str] = []
    for task in tasks:
        fields = task.to_record_fields()
        line = serialize_task(task)
        if line.split(SEPARATOR) != fields:
            logger.warning(
                "Description collides with %r and will not load back: %r", SEPARATOR, task.description
            )
        lines.append(line + "\n")

    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.writelines(lines)
    except OSError as e:
        raise PersistenceIOError(path, e) from e
    logger.debug("Saved %d task(s) to %s", len(lines), path)
