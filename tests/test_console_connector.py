# tests/test_console_connector.py

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from todo_manager.cli.bootstrap import create_initial_state, load_tasks
from todo_manager.cli.commands import MenuRegistry, cmd_exit, registry
from todo_manager.connectors.console_connector import run_console_loop
from todo_manager.tasks.task_models import Task

DUE = datetime(2024, 1, 1, 10, 0, 0, tzinfo=UTC)
BEFORE = datetime(2023, 12, 31, 23, 0, 0, tzinfo=UTC)
AFTER = datetime(2024, 1, 1, 10, 0, 1, tzinfo=UTC)


class StepClock:
    """Returns the given instants in order, then repeats the last one."""

    def __init__(self, *instants: datetime) -> None:
        self._instants = list(instants)

    def __call__(self) -> datetime:
        if len(self._instants) > 1:
            return self._instants.pop(0)
        return self._instants[0]


def test_add_view_then_reminder_once_due(state, settings, scripted) -> None:
    console = scripted(["1", "Buy milk", "2024-01-01 10:00:00", "2", "2", "4"])
    run_console_loop(state, console, clock=StepClock(BEFORE, BEFORE, AFTER))

    assert "Task 1: Buy milk\nDue date: 2024-01-01 10:00:00+00:00" in console.text
    assert console.output.count("Reminder: Task 'Buy milk' is due!") == 1
    assert settings.store_path.read_text("utf-8") == "Buy milk,2024-01-01 10:00:00+00:00\n"


def test_invalid_choice_redisplays_menu(state, scripted) -> None:
    console = scripted(["7", "4"])
    run_console_loop(state, console, clock=lambda: BEFORE)

    assert "Invalid choice. Please try again." in console.output
    assert console.output.count(registry.build_menu()) == 2


def test_eof_saves_and_exits(state, settings, scripted) -> None:
    console = scripted(["1", "Call mom", ""])
    run_console_loop(state, console, clock=lambda: BEFORE)
    assert settings.store_path.read_text("utf-8") == "Call mom\n"


def test_no_reminder_for_undated_tasks(state, scripted) -> None:
    console = scripted(["1", "Call mom", "", "4"])
    run_console_loop(state, console, clock=lambda: AFTER)
    assert not [line for line in console.output if line.startswith("Reminder:")]


def test_crashing_handler_does_not_stop_the_loop(state, scripted) -> None:
    def boom(state, console):
        raise RuntimeError("boom")

    reg = MenuRegistry()
    reg.register("1", "Boom", boom)
    reg.register("4", "Exit", cmd_exit, exits=True)

    console = scripted(["1", "4"])
    run_console_loop(state, console, registry=reg, clock=lambda: BEFORE)
    assert "Internal error while handling a command." in console.output


def test_failed_final_save_propagates(state, settings, scripted) -> None:
    settings.store_path.mkdir()
    with pytest.raises(OSError):
        run_console_loop(state, scripted(["4"]), clock=lambda: BEFORE)


def test_session_round_trip_through_store(settings, scripted) -> None:
    first = create_initial_state(settings=settings)
    run_console_loop(
        first,
        scripted(["1", "Buy milk", "2024-01-01 10:00:00", "1", "Call mom", "", "4"]),
        clock=lambda: BEFORE,
    )

    second = create_initial_state(settings=settings)
    load_tasks(second)
    assert second.tasks == [Task.create("Buy milk", DUE), Task.create("Call mom")]


def test_unreadable_store_starts_an_empty_session(settings, scripted) -> None:
    settings.store_path.write_bytes(b"\xff\xfe\n")
    state = create_initial_state(settings=settings)
    report = load_tasks(state)

    assert state.tasks == []
    assert report.dropped == [1]

    run_console_loop(state, scripted(["1", "Call mom", "", "4"]), clock=lambda: BEFORE)
    assert settings.store_path.read_text("utf-8") == "Call mom\n"
