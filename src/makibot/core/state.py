# src/makibot/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo

from ..tasks.task_list import TaskList
from ..tasks.task_store import TaskFileStore


@dataclass
class AppState:
    # Settings live on the state so handlers never read global config.
    settings: object

    task_list: TaskList
    store: TaskFileStore

    @property
    def display_zone(self) -> tzinfo:
        return self.store.display_zone

    @display_zone.setter
    def display_zone(self, tz: tzinfo) -> None:
        self.store.display_zone = tz

    @property
    def app_name(self) -> str:
        return str(getattr(self.settings, "app_name", "MakiBot"))
