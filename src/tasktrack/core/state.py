# src/tasktrack/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_manager import TaskManager


@dataclass
class AppState:
    # Settings object (config.Settings or a test double with the same fields).
    settings: object
    manager: TaskManager
