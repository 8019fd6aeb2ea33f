"""
Task subsystem.

Components:
- task_models.py: the Task record and priority helpers
- task_codec.py: pipe-delimited line format (encode/decode with escaping)
- task_manager.py: in-memory collection bound to a flat backing file
"""

from .task_manager import LoadResult, SkippedLine, TaskManager
from .task_models import Task

__all__ = ["LoadResult", "SkippedLine", "Task", "TaskManager"]
