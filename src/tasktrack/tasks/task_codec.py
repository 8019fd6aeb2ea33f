# tasks/task_codec.py

"""
Line format for the backing file.

One task per line, six pipe-delimited fields:

    id|description|category|priority|due_date|completed

Plain files carry the text fields verbatim, exactly as older versions wrote
them. When any description or category contains "|", "\\" or a line break, the
file starts with ESCAPED_HEADER and text fields are backslash-escaped. The
header line has a single field, so older readers skip it like any short line.
"""

from __future__ import annotations

from collections.abc import Iterable

from .task_models import Task

FIELD_SEP = "|"
FIELD_COUNT = 6
ESCAPED_HEADER = "#tasktrack:escaped"

_ESCAPES = {
    "\\": "\\\\",
    "|": "\\|",
    "\n": "\\n",
    "\r": "\\r",
}
_UNESCAPES = {"\\": "\\", "|": "|", "n": "\n", "r": "\r"}


class MalformedTaskLine(ValueError):
    """Raised when a stored line cannot be turned back into a Task."""


def escape_field(text: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def needs_escaping(task: Task) -> bool:
    return any(ch in _ESCAPES for ch in task.description + task.category)


def split_fields(line: str) -> list[str]:
    """Split on unescaped separators and unescape each field."""
    fields: list[str] = []
    buf: list[str] = []
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == "\\" and i + 1 < n:
            nxt = line[i + 1]
            # unknown escapes are kept verbatim
            buf.append(_UNESCAPES.get(nxt, "\\" + nxt))
            i += 2
            continue
        if ch == FIELD_SEP:
            fields.append("".join(buf))
            buf = []
        else:
            buf.append(ch)
        i += 1
    fields.append("".join(buf))
    return fields


def encode_task(task: Task, *, escaped: bool = False) -> str:
    text = escape_field if escaped else str
    return FIELD_SEP.join(
        (
            str(int(task.id)),
            text(task.description),
            text(task.category),
            str(int(task.priority)),
            str(int(task.due_date)),
            "1" if task.completed else "0",
        )
    )


def encode_tasks(tasks: Iterable[Task]) -> str:
    """Whole-file payload; adds ESCAPED_HEADER only when some text needs it."""
    tasks = list(tasks)
    escaped = any(needs_escaping(t) for t in tasks)
    lines = [encode_task(t, escaped=escaped) for t in tasks]
    if escaped:
        lines.insert(0, ESCAPED_HEADER)
    return "".join(line + "\n" for line in lines)


def _to_int(raw: str, name: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise MalformedTaskLine(f"{name} is not an integer: {raw!r}") from None


def decode_line(line: str, *, escaped: bool = False) -> Task:
    fields = split_fields(line) if escaped else line.split(FIELD_SEP)
    if len(fields) != FIELD_COUNT:
        raise MalformedTaskLine(f"expected {FIELD_COUNT} fields, got {len(fields)}")

    raw_id, description, category, raw_prio, raw_due, raw_done = fields
    if raw_done == "":
        # "a|b|c|d|e|" has only five tokens for a getline-style reader
        raise MalformedTaskLine("completed flag is empty")

    return Task(
        id=_to_int(raw_id, "id"),
        description=description,
        category=category,
        priority=_to_int(raw_prio, "priority"),
        due_date=_to_int(raw_due, "due_date"),
        completed=raw_done == "1",
    )
