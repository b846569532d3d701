# src/todo_manager/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by menu handlers.

Handlers talk to a Console instead of input()/print() directly,
so they can be driven by tests or another front end.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol


class Console(Protocol):
    def read(self, prompt: str) -> str: ...
    def write(self, text: str) -> None: ...


@dataclass(slots=True)
class StreamConsole:
    """Console over plain callables (defaults: input/print)."""

    reader: Callable[[str], str] = input
    writer: Callable[[str], None] = print

    def read(self, prompt: str) -> str:
        return self.reader(prompt)

    def write(self, text: str) -> None:
        self.writer(text)
