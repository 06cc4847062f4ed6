# tests/test_main.py

from __future__ import annotations

import logging
from datetime import timedelta, timezone
from pathlib import Path

import pytest
from fakes import ScriptedInput

import makibot.cli.main as cli_main
from makibot.cli.bootstrap import create_initial_state, load_task_list
from makibot.config import Settings


def _settings(tmp_path: Path, **overrides) -> Settings:
    values = dict(
        app_name="MakiBot",
        log_level="WARNING",
        data_dir=tmp_path / "logs",
        save_file_path=tmp_path / "data.txt",
        timezone="+08:00",
        prompt_on_start=False,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep pytest's log capture in place.
    monkeypatch.setattr(cli_main, "setup_logging", lambda **kwargs: None)


def test_first_run_session(monkeypatch, tmp_path: Path, capsys) -> None:
    settings = _settings(tmp_path)
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)

    cli_main.main(ScriptedInput(["todo buy milk", "bye"]))

    out = capsys.readouterr().out
    assert out.startswith("No tasks to load.\nHello! I'm MakiBot\nWhat can I do for you?\n")
    assert out.rstrip().endswith("Bye. Hope to see you again soon!")
    assert (tmp_path / "data.txt").read_text(encoding="utf-8") == "T | false | buy milk\n"


def test_session_with_startup_prompts(monkeypatch, tmp_path: Path, capsys) -> None:
    target = tmp_path / "sub" / "tasks.txt"
    settings = _settings(tmp_path, prompt_on_start=True)
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)

    cli_main.main(
        ScriptedInput(["y", "bogus", "+05:30", "y", "notes.md", str(target), "todo x", "list"])
    )

    out = capsys.readouterr().out
    assert "Your timezone is now GMT+05:30" in out
    assert f"Your save file is now {target}" in out
    assert "1. [T][ ] x" in out
    assert target.read_text(encoding="utf-8") == "T | false | x\n"
    assert not (tmp_path / "data.txt").exists()


def test_restart_rehydrates_in_display_zone(tmp_path: Path) -> None:
    (tmp_path / "data.txt").write_text(
        "D | true | submit report | 2024-03-01T01:00:00+00:00\nX | notabool | foo\nT | false | buy milk\n",
        encoding="utf-8",
    )
    state = create_initial_state(settings=_settings(tmp_path))

    result = load_task_list(state)

    assert result.loaded_count == 2
    assert [t.render() for t in state.task_list.all()] == [
        "[D][X] submit report (by: Mar 1 2024, 9:00am)",
        "[T][ ] buy milk",
    ]


def test_bad_timezone_setting_falls_back_to_system_zone(tmp_path: Path, monkeypatch, caplog) -> None:
    host = timezone(timedelta(hours=-3), name="GMT-03:00")
    monkeypatch.setattr("makibot.cli.bootstrap.system_zone", lambda: host)

    with caplog.at_level(logging.WARNING, logger="makibot.cli.bootstrap"):
        state = create_initial_state(settings=_settings(tmp_path, timezone="Nowhere/Special"))

    assert state.display_zone == host
    assert "Unknown timezone 'Nowhere/Special'" in caplog.text
