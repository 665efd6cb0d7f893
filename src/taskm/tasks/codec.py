# src/taskm/tasks/codec.py

"""
Line-oriented text format for task files.

One task per line:

    id|title|done|created_at|priority

- done is "true"/"false"
- created_at is "YYYY-MM-DD HH:MM:SS"
- title is written verbatim; a title containing "|" or a newline will not
  survive a round trip (known limitation of the format)

The same format is used for the primary task file (full atomic rewrite)
and for the archive file (append-only).
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import tempfile
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from ..errors import StorageError, TaskLineError
from .task_models import Priority, Task

logger = logging.getLogger(__name__)

SEPARATOR = "|"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
FIELD_COUNT = 5

_ID_RE = re.compile(r"[+-]?[0-9]+")

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def format_task_line(task: Task) -> str:
    return SEPARATOR.join(
        (
            str(task.id),
            task.title,
            "true" if task.done else "false",
            task.created_at.strftime(TIME_FORMAT),
            str(task.priority),
        )
    ) + "\n"


def _parse_bool(raw: str) -> bool:
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean {raw!r}")


def _strip_line_end(line: str) -> str:
    # Records end at "\n" only; a "\r" inside a title is data.
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def parse_task_line(line: str | bytes, *, line_number: int = 0, source: str = "<input>") -> Task:
    """
    Decode one line.

    Raises TaskLineError if the line must be skipped. An unknown priority is
    not an error: it is coerced to medium with a warning. Raw bytes are
    decoded as UTF-8 here, so an undecodable line only costs that line.
    """
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TaskLineError(
                f"{source}:{line_number}: not valid UTF-8 ({exc.reason} at byte {exc.start})",
                line_number=line_number,
            ) from None

    parts = _strip_line_end(line).split(SEPARATOR, FIELD_COUNT - 1)
    if len(parts) != FIELD_COUNT:
        raise TaskLineError(
            f"{source}:{line_number}: expected {FIELD_COUNT} fields, got {len(parts)}",
            line_number=line_number,
        )

    raw_id, title, raw_done, raw_created, raw_priority = parts

    if not _ID_RE.fullmatch(raw_id):
        raise TaskLineError(f"{source}:{line_number}: invalid id {raw_id!r}", line_number=line_number)
    task_id = int(raw_id)

    try:
        done = _parse_bool(raw_done)
    except ValueError:
        raise TaskLineError(
            f"{source}:{line_number}: invalid done flag {raw_done!r}", line_number=line_number
        ) from None

    try:
        created_at = datetime.strptime(raw_created, TIME_FORMAT)
    except ValueError:
        created_at = None
    # strptime accepts unpadded fields; only the fixed-width form is valid.
    if created_at is None or created_at.strftime(TIME_FORMAT) != raw_created:
        raise TaskLineError(
            f"{source}:{line_number}: invalid timestamp {raw_created!r}", line_number=line_number
        )

    priority = Priority.parse(raw_priority)
    if priority is None:
        logger.warning(
            "%s:%d: unknown priority %r, using %s", source, line_number, raw_priority, Priority.MEDIUM
        )
        priority = Priority.MEDIUM

    return Task(id=task_id, title=title, done=done, created_at=created_at, priority=priority)


def decode_tasks(lines: Iterable[str | bytes], *, source: str = "<input>") -> tuple[list[Task], int]:
    """Decode lines, skipping bad ones (blank lines included). Returns (tasks, max_id)."""
    tasks: list[Task] = []
    max_id = 0

    for line_number, line in enumerate(lines, start=1):
        try:
            task = parse_task_line(line, line_number=line_number, source=source)
        except TaskLineError as exc:
            logger.warning("Skipping malformed line: %s", exc)
            continue

        tasks.append(task)
        max_id = max(max_id, task.id)

    return tasks, max_id


def load_tasks(path: str | Path) -> tuple[list[Task], int]:
    """
    Read a task file. A missing file is an empty task list, not an error.

    The file is read as bytes and split on "\\n" only; each line is decoded
    on its own.
    """
    path = Path(path)
    try:
        with path.open("rb") as f:
            return decode_tasks(f, source=str(path))
    except FileNotFoundError:
        return [], 0
    except OSError as exc:
        raise StorageError(f"failed to read {path}: {exc}") from exc


def save_tasks(path: str | Path, tasks: Iterable[Task]) -> None:
    """
    Replace `path` with the encoded tasks.

    Data goes to a temp file in the same directory first and is then moved
    over the target with os.replace, so the target is either the old file
    or the complete new one.
    """
    path = Path(path)
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    except OSError as exc:
        raise StorageError(f"failed to create temp file next to {path}: {exc}") from exc
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            for task in tasks:
                f.write(format_task_line(task))
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except (OSError, ValueError) as exc:
        with contextlib.suppress(OSError):
            tmp.unlink()
        raise StorageError(f"failed to save tasks to {path}: {exc}") from exc


def append_tasks(path: str | Path, tasks: Iterable[Task]) -> int:
    """
    Append tasks to `path`, creating it if needed. Returns lines written.

    A failed record is reported and skipped; a failed open/flush raises.
    """
    path = Path(path)
    written = 0
    try:
        with path.open("a", encoding="utf-8", newline="") as f:
            for task in tasks:
                try:
                    f.write(format_task_line(task))
                    written += 1
                except (OSError, ValueError):
                    logger.warning("Failed to append task %s to %s", task.id, path, exc_info=True)
            f.flush()
    except OSError as exc:
        raise StorageError(f"failed to append to {path}: {exc}") from exc
    return written
