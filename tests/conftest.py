# tests/conftest.py

from __future__ import annotations

from datetime import timedelta, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest

from makibot.cli.bootstrap import create_initial_state
from makibot.core.state import AppState

GMT8 = timezone(timedelta(hours=8))


@pytest.fixture()
def gmt8() -> timezone:
    return GMT8


@pytest.fixture()
def save_file(tmp_path: Path) -> Path:
    return tmp_path / "data.txt"


@pytest.fixture()
def settings(tmp_path: Path, save_file: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="MakiBot",
        log_level="WARNING",
        data_dir=tmp_path / "logs",
        save_file_path=save_file,
        timezone="+08:00",
        prompt_on_start=False,
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """AppState with an empty task list and a store pointing at tmp_path."""
    return create_initial_state(settings=settings)
