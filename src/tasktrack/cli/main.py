# src/tasktrack/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, runs the console loop and, on the way
out, retries any save that failed during the session.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..core.state import AppState
from ..logging_setup import setup_logging
from .console import run_console_loop

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """
    Final flush.

    Every mutation already saved; only retry when one of those saves failed.
    A file that failed to load is never overwritten by an untouched session.
    """
    manager = state.manager
    if not manager.has_unsaved_changes:
        logger.debug("Nothing to flush on exit.")
        return
    if not manager.save():
        logger.error("Final save failed; changes since the last successful save are lost.")


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
