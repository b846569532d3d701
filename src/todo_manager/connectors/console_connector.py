# src/todo_manager/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from ..cli.commands import MenuRegistry
from ..cli.commands import registry as menu_registry
from ..core.ports import Console, StreamConsole
from ..core.state import AppState

logger = logging.getLogger(__name__)

CHOICE_PROMPT = "Enter your choice: "


def _utc_now() -> datetime:
    return datetime.now(UTC)


def print_reminders(state: AppState, console: Console, now: datetime) -> int:
    due = state.due_tasks(now)
    for task in due:
        console.write(f"Reminder: Task '{task.description}' is due!")
    return len(due)


def run_console_loop(
    state: AppState,
    console: Console | None = None,
    *,
    registry: MenuRegistry | None = None,
    clock: Callable[[], datetime] = _utc_now,
) -> None:
    """
    Menu loop: show menu, run the chosen action, print reminders, repeat.

    Leaves after the exit entry ran (it saves the store). EOF / Ctrl+C run the
    exit entry as well. OSError from the exit entry propagates.
    """
    console = console or StreamConsole()
    registry = registry or menu_registry
    logger.info("Console connector started (%d task(s) loaded).", len(state.tasks))

    while True:
        console.write(registry.build_menu())
        try:
            choice = console.read(CHOICE_PROMPT).strip()
            entry = registry.get(choice)
            if entry is None:
                console.write("Invalid choice. Please try again.")
            elif entry.exits:
                _run_exit(state, console, registry)
                break
            else:
                _run_entry(state, console, entry.handler)
        except EOFError:
            logger.info("Console EOF received, exiting.")
            _run_exit(state, console, registry)
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            console.write("")
            _run_exit(state, console, registry)
            break

        print_reminders(state, console, clock())

    logger.info("Console connector finished.")


def _run_entry(state: AppState, console: Console, handler) -> None:
    try:
        reply = handler(state, console)
    except (EOFError, KeyboardInterrupt):
        raise
    except Exception:
        logger.exception("Menu handler crashed.")
        reply = "Internal error while handling a command."
    if reply is not None:
        console.write(reply)


def _run_exit(state: AppState, console: Console, registry: MenuRegistry) -> None:
    entry = registry.exit_entry()
    if entry is None:
        return
    reply = entry.handler(state, console)
    if reply is not None:
        console.write(reply)
