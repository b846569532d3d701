# src/todo_manager/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the task store, then runs the
console menu in the main thread. The store is written back when the menu exits.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state, load_tasks
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..tasks.task_codec import TaskFormatError

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    try:
        load_tasks(state)
    except TaskFormatError:
        # Only raised in strict load mode.
        logger.exception("Failed to load tasks from %s", settings.store_path)
        raise

    try:
        run_console_loop(state)
    except OSError:
        logger.exception("Failed to save tasks to %s", settings.store_path)
        raise

    logger.info("Bye.")


if __name__ == "__main__":
    main()
