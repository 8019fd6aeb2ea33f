# src/tasktrack/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the TaskManager into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_manager import TaskManager

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    manager = TaskManager(settings.tasks_path)
    result = manager.last_load
    if not result.ok:
        logger.error("Task file %s could not be read; starting with no tasks.", settings.tasks_path)
    elif result.skipped:
        logger.warning(
            "%d malformed line(s) in %s were skipped.", len(result.skipped), settings.tasks_path
        )

    return AppState(settings=settings, manager=manager)
