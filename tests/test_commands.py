# tests/test_commands.py

from __future__ import annotations

from pathlib import Path

from makibot.cli.bootstrap import load_task_list
from makibot.cli.commands import CommandRegistry, registry
from makibot.core.state import AppState


def test_command_registry_routes_names_and_aliases(state: AppState) -> None:
    reg = CommandRegistry()
    seen: list[str] = []

    def handler(state, args):
        seen.append(args)
        return "ok"

    reg.register("ping", handler, "ping", aliases=["p"])

    assert reg.handle(state, "ping  hello world ") == "ok"
    assert reg.handle(state, "P x") == "ok"
    assert seen == ["hello world", "x"]
    assert "ping - ping" in reg.build_help()


def test_command_registry_unknown_and_empty(state: AppState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "   ") is None
    assert "don't know" in (reg.handle(state, "nope") or "")


def test_todo_is_added_and_saved(state: AppState, save_file: Path) -> None:
    reply = registry.handle(state, "todo read book")

    assert reply == (
        "Got it. I've added this task:\n"
        "\t[T][ ] read book\n"
        "Now you have 1 tasks in the list.\n"
        "Tasks saved successfully!"
    )
    assert save_file.read_text(encoding="utf-8") == "T | false | read book\n"


def test_deadline_without_offset_uses_display_zone(state: AppState, save_file: Path) -> None:
    reply = registry.handle(state, "deadline return book /by 2024-03-01 18:00")

    assert "[D][ ] return book (by: Mar 1 2024, 6:00pm)" in (reply or "")
    assert save_file.read_text(encoding="utf-8") == "D | false | return book | 2024-03-01T18:00:00+08:00\n"


def test_explicit_offset_is_shown_and_saved_in_display_zone(state: AppState, save_file: Path) -> None:
    reply = registry.handle(state, "event conference /at 2024-06-10T09:30:00+00:00") or ""

    assert "[E][ ] conference (at: Jun 10 2024, 5:30pm)" in reply
    assert save_file.read_text(encoding="utf-8") == "E | false | conference | 2024-06-10T17:30:00+08:00\n"

    registry.handle(state, "deadline call /by 2024-06-10T09:30-04:00")
    before = registry.handle(state, "list")
    load_task_list(state)
    assert registry.handle(state, "list") == before
    assert "2. [D][ ] call (by: Jun 10 2024, 9:30pm)" in (before or "")


def test_invalid_add_commands_create_nothing(state: AppState, save_file: Path) -> None:
    for line in ("todo", "todo    ", "deadline no date", "deadline /by 2024-03-01", "event x /at someday"):
        reply = registry.handle(state, line) or ""
        assert reply.startswith("OOPS!!!"), line

    assert state.task_list.size() == 0
    assert not save_file.exists()


def test_done_undone_delete_cycle(state: AppState, save_file: Path) -> None:
    registry.handle(state, "todo a")
    registry.handle(state, "todo b")
    registry.handle(state, "todo c")

    reply = registry.handle(state, "done 2")
    assert reply == "Nice! I've marked this task as done:\n\t[T][X] b\nTasks saved successfully!"
    assert save_file.read_text(encoding="utf-8").splitlines()[1] == "T | true | b"

    reply = registry.handle(state, "undone 2")
    assert reply == "OK, I've marked this task as not done yet:\n\t[T][ ] b\nTasks saved successfully!"

    reply = registry.handle(state, "delete 1")
    assert reply == (
        "Noted. I've removed this task:\n"
        "\t[T][ ] a\n"
        "Now you have 2 tasks in the list.\n"
        "Tasks saved successfully!"
    )
    assert save_file.read_text(encoding="utf-8") == "T | false | b\nT | false | c\n"


def test_bad_index_reports_and_keeps_state(state: AppState, save_file: Path) -> None:
    registry.handle(state, "todo a")
    before = save_file.read_text(encoding="utf-8")

    assert "pick a number from 1 to 1" in (registry.handle(state, "done 5") or "")
    assert "Usage: delete" in (registry.handle(state, "delete first") or "")
    assert "Usage: undone" in (registry.handle(state, "undone") or "")

    assert state.task_list.size() == 1
    assert save_file.read_text(encoding="utf-8") == before


def test_list_empty_and_filled(state: AppState) -> None:
    assert registry.handle(state, "list") == "You have no tasks at the moment!"

    registry.handle(state, "todo a")
    registry.handle(state, "deadline b /by 2024-03-01T09:00+08:00")
    registry.handle(state, "done 1")

    assert registry.handle(state, "LIST") == (
        "Here are the tasks in your list:\n"
        "1. [T][X] a\n"
        "2. [D][ ] b (by: Mar 1 2024, 9:00am)"
    )


def test_save_failure_keeps_in_memory_state(state: AppState, tmp_path: Path) -> None:
    state.store.path = tmp_path / "missing-dir" / "data.txt"

    reply = registry.handle(state, "todo survive")

    assert (reply or "").endswith("An error occurred while saving your tasks.")
    assert [t.description for t in state.task_list.all()] == ["survive"]

    state.store.path = tmp_path / "data.txt"
    assert (registry.handle(state, "done 1") or "").endswith("Tasks saved successfully!")
    assert (tmp_path / "data.txt").read_text(encoding="utf-8") == "T | true | survive\n"


def test_help_and_timezone(state: AppState) -> None:
    help_text = registry.handle(state, "help") or ""
    for name in ("todo", "deadline", "event", "list", "done", "undone", "delete"):
        assert f"  {name} - " in help_text
    assert registry.handle(state, "timezone") == "Dates are shown in timezone GMT+08:00."
