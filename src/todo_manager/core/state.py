# src/todo_manager/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, tzinfo

from ..tasks.task_codec import TaskCodec
from ..tasks.task_models import Task


@dataclass
class AppState:
    # Settings are kept on the state so handlers don't read global config.
    settings: object

    codec: TaskCodec
    # None = machine local time.
    tz: tzinfo | None = None

    # The session's task list. Only menu handlers mutate it.
    tasks: list[Task] = field(default_factory=list)

    def add_task(self, description: str, due_date: datetime | None = None) -> Task:
        task = Task.create(description, due_date)
        self.tasks.append(task)
        return task

    def due_tasks(self, now: datetime | None = None) -> list[Task]:
        return [t for t in self.tasks if t.is_due(now)]
