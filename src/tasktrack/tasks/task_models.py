# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

PRIORITY_NONE = 0
PRIORITY_MIN = 1
PRIORITY_MAX = 5

SECONDS_PER_HOUR = 3600

DUE_FORMAT = "%Y-%m-%d %H:%M:%S"


def normalize_priority(value: int) -> int:
    """Return `value` when it is a real priority (1-5), otherwise PRIORITY_NONE."""
    if PRIORITY_MIN <= value <= PRIORITY_MAX:
        return value
    return PRIORITY_NONE


def due_from_now(now_ts: float, hours: int) -> int:
    return int(now_ts) + int(hours) * SECONDS_PER_HOUR


@dataclass(slots=True)
class Task:
    """
    One unit of trackable work.

    Notes:
    - due_date is epoch seconds (int), computed by the manager from "now + hours".
    - fields are plain attributes; the manager is the only writer.
    """

    id: int
    description: str
    category: str
    priority: int
    due_date: int
    completed: bool = False

    @property
    def due_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.due_date).astimezone()

    def display(self) -> str:
        due = self.due_datetime.strftime(DUE_FORMAT)
        return (
            f"ID: {self.id}, Description: {self.description}, "
            f"Category: {self.category}, Priority: {self.priority}, "
            f"Due: {due}, Completed: {'Yes' if self.completed else 'No'}"
        )
