# tests/test_task_models.py

from __future__ import annotations

from datetime import datetime

import pytest

from tasktrack.tasks.task_models import Task, due_from_now, normalize_priority


@pytest.mark.parametrize(("raw", "expected"), [(0, 0), (1, 1), (5, 5), (6, 0), (-3, 0)])
def test_normalize_priority(raw: int, expected: int) -> None:
    assert normalize_priority(raw) == expected


def test_due_from_now_truncates_clock_to_seconds() -> None:
    assert due_from_now(100.9, 2) == 100 + 7200
    assert due_from_now(100.0, -1) == 100 - 3600


def test_display_renders_all_fields_in_local_time() -> None:
    due = 1_700_000_000
    task = Task(id=3, description="buy milk", category="errand", priority=2, due_date=due)
    expected_due = datetime.fromtimestamp(due).strftime("%Y-%m-%d %H:%M:%S")

    assert task.display() == (
        f"ID: 3, Description: buy milk, Category: errand, Priority: 2, "
        f"Due: {expected_due}, Completed: No"
    )

    task.completed = True
    assert task.display().endswith("Completed: Yes")
