# src/todo_manager/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (loading the task file), runs the console REPL,
then saves the task list on the way out.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state, save_task_store
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        if state.dirty or not state.autosave:
            save_task_store(state)
    except Exception:
        logger.exception("Failed to save tasks on shutdown.")


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    log_dir = getattr(settings, "data_dir", ".local/todo")
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "todo"))

    state = create_initial_state(settings=settings)

    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
