# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_manager.cli.bootstrap import create_initial_state
from todo_manager.core.state import AppState


class ScriptedConsole:
    """
    Console fed from a list of input lines.

    Records prompts and output for assertions; raises EOFError when the
    script runs out, like input() at end of stdin.
    """

    def __init__(self, lines: list[str]) -> None:
        self._lines = list(lines)
        self.prompts: list[str] = []
        self.output: list[str] = []

    def read(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._lines:
            raise EOFError
        return self._lines.pop(0)

    def write(self, text: str) -> None:
        self.output.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap helpers.

    UTC as reference frame keeps timestamps independent of the test machine.
    """
    return SimpleNamespace(
        app_name="todo-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        store_path=tmp_path / "tasks.csv",
        export_path=tmp_path / "exported_tasks.csv",
        log_dir=tmp_path / "logs",
        timezone="utc",
        load_mode="lenient",
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    return create_initial_state(settings=settings)


@pytest.fixture()
def scripted():
    return ScriptedConsole
