# src/todo_manager/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..core.ports import Console
from ..core.state import AppState
from ..tasks.task_models import INPUT_FORMAT, DueDateParseError, format_due, parse_due_input
from .bootstrap import export_tasks, save_tasks

MenuHandler = Callable[[AppState, Console], str | None]

logger = logging.getLogger(__name__)

MENU_TITLE = "Todo List Manager"
DESCRIPTION_PROMPT = "Enter task description: "
DUE_DATE_PROMPT = "Enter due date (optional, format YYYY-MM-DD HH:MM:SS) or leave blank for no due date: "


@dataclass(frozen=True, slots=True)
class MenuEntry:
    key: str
    label: str
    handler: MenuHandler
    exits: bool = False


class MenuRegistry:
    """Numbered menu used by the console connector (1 add, 2 view, ...)."""

    def __init__(self) -> None:
        self._entries: dict[str, MenuEntry] = {}

    def register(self, key: str, label: str, handler: MenuHandler, *, exits: bool = False) -> None:
        self._entries[key] = MenuEntry(key=key, label=label, handler=handler, exits=exits)

    def get(self, choice: str) -> MenuEntry | None:
        return self._entries.get(choice.strip())

    def exit_entry(self) -> MenuEntry | None:
        for entry in self._entries.values():
            if entry.exits:
                return entry
        return None

    def build_menu(self) -> str:
        lines = [MENU_TITLE]
        for entry in self._entries.values():
            lines.append(f"{entry.key}. {entry.label}")
        return "\n".join(lines)


registry = MenuRegistry()


def cmd_add(state: AppState, console: Console) -> str | None:
    description = console.read(DESCRIPTION_PROMPT).strip()

    while True:
        raw = console.read(DUE_DATE_PROMPT)
        try:
            due = parse_due_input(raw, state.tz)
        except DueDateParseError as e:
            logger.debug("Rejected due date input %r (expected %s)", raw, INPUT_FORMAT)
            console.write(f"Invalid date format. Please try again. Error: {e}")
            continue
        break

    state.add_task(description, due)
    logger.info("Added task #%d (due=%s)", len(state.tasks), due)
    return None


def cmd_view(state: AppState, console: Console) -> str | None:
    if not state.tasks:
        return "No tasks yet."
    lines: list[str] = []
    for i, task in enumerate(state.tasks, start=1):
        lines.append(f"Task {i}: {task.description}")
        lines.append(format_due(task, state.tz))
    return "\n".join(lines)


def cmd_export(state: AppState, console: Console) -> str | None:
    try:
        path = export_tasks(state)
    except OSError as e:
        logger.exception("Export failed.")
        return f"Export failed: {e}"
    return f"Tasks have been exported to {path.name}"


def cmd_exit(state: AppState, console: Console) -> str | None:
    # OSError propagates: a failed final save must not look like a clean exit.
    path = save_tasks(state)
    logger.info("Saved %d task(s) to %s", len(state.tasks), path)
    return None


registry.register("1", "Add a new task", cmd_add)
registry.register("2", "View all tasks", cmd_view)
registry.register("3", "Export tasks to CSV", cmd_export)
registry.register("4", "Exit", cmd_exit, exits=True)
