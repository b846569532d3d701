# src/todo_manager/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- wires the codec (load policy, display timezone) into AppState,
- loads the persisted store at startup and writes it back at exit.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_codec import LoadPolicy, LoadReport, TaskCodec
from ..tasks.task_models import resolve_timezone

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    tz = resolve_timezone(getattr(settings, "timezone", "local"))
    codec = TaskCodec(
        policy=LoadPolicy.from_config(getattr(settings, "load_mode", None)),
        display_tz=tz,
    )
    return AppState(settings=settings, codec=codec, tz=tz)


def load_tasks(state: AppState) -> LoadReport:
    """Append the persisted store to state.tasks (missing store -> nothing)."""
    path = Path(state.settings.store_path)  # type: ignore[attr-defined]
    return state.codec.load(path, state.tasks)


def save_tasks(state: AppState) -> Path:
    """Overwrite the persisted store with state.tasks. OSError propagates."""
    path = Path(state.settings.store_path)  # type: ignore[attr-defined]
    return state.codec.save(path, state.tasks)


def export_tasks(state: AppState) -> Path:
    path = Path(state.settings.export_path)  # type: ignore[attr-defined]
    return state.codec.export(path, state.tasks)
