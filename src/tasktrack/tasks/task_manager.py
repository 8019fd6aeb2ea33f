# tasks/task_manager.py

from __future__ import annotations

import contextlib
import logging
import os
import time
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from pathlib import Path

from .task_codec import ESCAPED_HEADER, MalformedTaskLine, decode_line, encode_tasks
from .task_models import Task, due_from_now, normalize_priority

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(slots=True)
class SkippedLine:
    line_no: int
    text: str
    reason: str


@dataclass(slots=True)
class LoadResult:
    ok: bool
    loaded: int = 0
    skipped: list[SkippedLine] = field(default_factory=list)


class TaskManager:
    """
    Flat-file task store.

    The whole collection lives in memory; the file is the persistence binding:
    - load once at construction (and on explicit load())
    - rewrite the whole file after every successful mutation

    Ids come from an allocator owned by the instance. It is recomputed from the
    file (max id + 1) and never goes backwards, so deleted ids are not reused.
    """

    def __init__(self, path: str | Path = "tasks.txt", *, clock: Clock = time.time) -> None:
        self._path = Path(path)
        self._clock = clock
        self._tasks: list[Task] = []
        self._next_id = 1
        self._dirty = False
        self.last_load = self.load()
        logger.info(
            "TaskManager ready path=%s tasks=%d next_id=%d",
            self._path,
            len(self._tasks),
            self._next_id,
        )

    @property
    def path(self) -> Path:
        return self._path

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def has_unsaved_changes(self) -> bool:
        """True after a mutation whose save failed."""
        return self._dirty

    # ---- low-level helpers ----

    def _find(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def _allocate_id(self) -> int:
        nid = self._next_id
        self._next_id += 1
        return nid

    def _now(self) -> float:
        return self._clock()

    def _apply(self, task_id: int, action: str, mutate: Callable[[Task], None]) -> bool:
        task = self._find(task_id)
        if task is None:
            logger.debug("%s: no task id=%s", action, task_id)
            return False
        mutate(task)
        logger.debug("%s id=%s", action, task_id)
        self._dirty = True
        self.save()
        return True

    # ---- CRUD ----

    def add_task(self, description: str, category: str, priority: int, hours_until_due: int) -> int:
        task = Task(
            id=self._allocate_id(),
            description=description,
            category=category,
            priority=normalize_priority(priority),
            due_date=due_from_now(self._now(), hours_until_due),
        )
        self._tasks.append(task)
        logger.debug("Task added id=%s category=%s due=%s", task.id, task.category, task.due_date)
        self._dirty = True
        self.save()
        return task.id

    def edit_task(
        self,
        task_id: int,
        description: str,
        category: str,
        priority: int,
        hours_until_due: int,
    ) -> bool:
        due = due_from_now(self._now(), hours_until_due)

        def _set_all(task: Task) -> None:
            task.description = description
            task.category = category
            task.priority = normalize_priority(priority)
            task.due_date = due

        return self._apply(task_id, "edit_task", _set_all)

    def edit_description(self, task_id: int, text: str) -> bool:
        return self._apply(task_id, "edit_description", lambda t: setattr(t, "description", text))

    def edit_category(self, task_id: int, text: str) -> bool:
        return self._apply(task_id, "edit_category", lambda t: setattr(t, "category", text))

    def edit_priority(self, task_id: int, value: int) -> bool:
        prio = normalize_priority(value)
        return self._apply(task_id, "edit_priority", lambda t: setattr(t, "priority", prio))

    def edit_due_date(self, task_id: int, hours_from_now: int) -> bool:
        due = due_from_now(self._now(), hours_from_now)
        return self._apply(task_id, "edit_due_date", lambda t: setattr(t, "due_date", due))

    def mark_complete(self, task_id: int) -> bool:
        return self._apply(task_id, "mark_complete", lambda t: setattr(t, "completed", True))

    def delete_task(self, task_id: int) -> bool:
        task = self._find(task_id)
        if task is None:
            logger.debug("delete_task: no task id=%s", task_id)
            return False
        self._tasks.remove(task)
        logger.debug("Task deleted id=%s", task_id)
        self._dirty = True
        self.save()
        return True

    # ---- queries ----

    def get_task(self, task_id: int) -> Task | None:
        task = self._find(task_id)
        return replace(task) if task is not None else None

    def list_all(self) -> tuple[Task, ...]:
        return tuple(replace(t) for t in self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- persistence ----

    def save(self) -> bool:
        """
        Rewrite the backing file with the whole collection.

        Writes to a sibling .tmp file and renames it over the target, so an
        interrupted save leaves the previous file intact.
        Returns False (and logs) if the file could not be written.
        """
        payload = encode_tasks(self._tasks)
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError:
            logger.exception("Unable to save tasks to %s", self._path)
            with contextlib.suppress(OSError):
                tmp.unlink()
            return False
        self._dirty = False
        logger.debug("Saved %d tasks to %s", len(self._tasks), self._path)
        return True

    def load(self) -> LoadResult:
        """
        Replace the in-memory collection with the file contents.

        A missing file is a normal first run (empty collection). Lines that are
        not UTF-8, do not decode, or repeat an earlier id are skipped and
        reported in the result; they do not count toward the allocator.
        """
        self._dirty = False
        if not self._path.exists():
            self._tasks = []
            logger.info("No task file at %s yet; starting empty.", self._path)
            return LoadResult(ok=True)

        try:
            raw = self._path.read_bytes()
        except OSError:
            logger.exception("Unable to load tasks from %s", self._path)
            self._tasks = []
            return LoadResult(ok=False)

        tasks: list[Task] = []
        seen: set[int] = set()
        skipped: list[SkippedLine] = []

        raw_lines = raw.split(b"\n")
        escaped = raw_lines[0].rstrip(b"\r") == ESCAPED_HEADER.encode()
        for line_no, raw_line in enumerate(raw_lines, start=1):
            if escaped and line_no == 1:
                continue
            raw_line = raw_line.rstrip(b"\r")
            if not raw_line.strip():
                continue
            try:
                line = raw_line.decode("utf-8")
            except UnicodeDecodeError:
                text = raw_line.decode("utf-8", errors="replace")
                skipped.append(SkippedLine(line_no=line_no, text=text, reason="not valid UTF-8"))
                continue
            try:
                task = decode_line(line, escaped=escaped)
            except MalformedTaskLine as e:
                skipped.append(SkippedLine(line_no=line_no, text=line, reason=str(e)))
                continue
            if task.id in seen:
                skipped.append(SkippedLine(line_no=line_no, text=line, reason=f"duplicate id {task.id}"))
                continue
            seen.add(task.id)
            tasks.append(task)

        for s in skipped:
            logger.warning("Skipped line %d in %s (%s): %r", s.line_no, self._path, s.reason, s.text)

        self._tasks = tasks
        if tasks:
            self._next_id = max(self._next_id, max(t.id for t in tasks) + 1)

        logger.info(
            "Loaded %d tasks from %s (skipped=%d, next_id=%d)",
            len(tasks),
            self._path,
            len(skipped),
            self._next_id,
        )
        return LoadResult(ok=True, loaded=len(tasks), skipped=skipped)
