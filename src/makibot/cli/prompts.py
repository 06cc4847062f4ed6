# src/makibot/cli/prompts.py

"""
Startup prompts: optional timezone and save-file overrides.

Both prompts ask Y/N first and keep the current value on anything but Y, or
when input ends.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import tzinfo
from pathlib import Path

from ..core.ports import InputSource
from ..core.zones import parse_zone, zone_name

logger = logging.getLogger(__name__)

Emit = Callable[[str], None]


def _confirm(source: InputSource, emit: Emit, question: str) -> bool:
    emit(question)
    answer = source.read_line()
    return answer is not None and answer.strip().lower() in ("y", "yes")


def prompt_timezone(source: InputSource, emit: Emit, current: tzinfo) -> tzinfo:
    if not _confirm(
        source,
        emit,
        f"You are currently in timezone: {zone_name(current)}\nWould you like to change your timezone? Y/N",
    ):
        return current

    while True:
        emit("What is your timezone relative to GMT? (+/-HH:mm, or a name like Asia/Singapore)")
        raw = source.read_line()
        if raw is None:
            return current
        try:
            tz = parse_zone(raw)
        except ValueError:
            logger.debug("Rejected timezone input %r", raw)
            emit("OOPS!!! I don't understand that timezone.")
            continue
        emit(f"Your timezone is now {zone_name(tz)}")
        return tz


def validate_save_path(raw: str) -> Path | None:
    """
    Return the path when it names a .txt file whose parent directory exists or
    can be created; None otherwise. Creates the parent directory.
    """
    text = (raw or "").strip()
    if not text.endswith(".txt"):
        return None
    path = Path(text).expanduser()
    if path.is_dir():
        return None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.debug("Cannot create parent of %s: %s", path, e)
        return None
    return path


def prompt_save_file(source: InputSource, emit: Emit, current: Path) -> Path:
    chosen = current
    if _confirm(
        source,
        emit,
        f"Your current save file is {current}\nWould you like to change your save file? Y/N",
    ):
        while True:
            emit("What is the path of your save file? (must end in .txt)")
            raw = source.read_line()
            if raw is None:
                break
            path = validate_save_path(raw)
            if path is not None:
                chosen = path
                break
            emit("OOPS!!! That is not a usable .txt file path.")

    emit(f"Your save file is now {chosen}")
    return chosen
