# src/makibot/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- resolves the display zone from settings,
- wires the file store and the task list into AppState,
- rehydrates tasks from the save file.
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from pathlib import Path

from ..config import get_settings
from ..core.state import AppState
from ..core.zones import parse_zone, system_zone
from ..tasks.task_codec import LoadResult
from ..tasks.task_list import TaskList
from ..tasks.task_store import TaskFileStore

logger = logging.getLogger(__name__)


def resolve_display_zone(name: str) -> tzinfo:
    if not name:
        return system_zone()
    try:
        return parse_zone(name)
    except ValueError:
        logger.warning("Unknown timezone %r in settings, using the system zone.", name)
        return system_zone()


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState with an empty task list.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    zone = resolve_display_zone(str(getattr(settings, "timezone", "") or ""))
    store = TaskFileStore(Path(getattr(settings, "save_file_path", "data.txt")), zone)
    return AppState(settings=settings, task_list=TaskList(), store=store)


def load_task_list(state: AppState) -> LoadResult:
    """Replace the state's task list with the save file's contents."""
    result = state.store.load()
    state.task_list = TaskList(result.tasks)
    return result
