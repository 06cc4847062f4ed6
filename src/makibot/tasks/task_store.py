# src/makibot/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import tzinfo
from pathlib import Path

from ..core.zones import zone_name
from .task_codec import LoadResult, load_tasks, save_tasks
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskFileStore:
    """
    Plain-text task store.

    Binds the save-file path and the display zone to the codec. The whole
    file is rewritten on every save; the store keeps no task references.
    The file is assumed to belong to this process only (no locking).
    """

    def __init__(self, path: str | Path, display_zone: tzinfo) -> None:
        self.path = Path(path)
        self.display_zone = display_zone
        logger.info("TaskFileStore ready path=%s zone=%s", self.path, zone_name(display_zone))

    def load(self) -> LoadResult:
        return load_tasks(self.path, self.display_zone)

    def save(self, tasks: Iterable[Task]) -> None:
        """Rewrite the save file. Raises PersistenceIOError on failure."""
        save_tasks(tasks, self.path)
