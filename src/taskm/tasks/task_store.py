# src/taskm/tasks/task_store.py

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from enum import StrEnum
from pathlib import Path

from .codec import save_tasks
from .id_generator import IdGenerator
from .task_models import Priority, Task

logger = logging.getLogger(__name__)


class MarkDoneStatus(StrEnum):
    MARKED = "marked"
    ALREADY_DONE = "already_done"
    NOT_FOUND = "not_found"


class TaskStore:
    """
    In-memory task list guarded by a single lock.

    The store owns its list. Everything handed out is a copy, so callers
    can sort/filter freely without holding the lock.

    Deletion policy:
    - delete() swaps the victim with the last element and pops (O(1)),
      so the order of the remaining tasks is NOT preserved across deletes.
    """

    def __init__(self, tasks: list[Task] | None = None, *, id_gen: IdGenerator | None = None) -> None:
        self._lock = threading.Lock()
        self._tasks: list[Task] = [replace(t) for t in (tasks or [])]
        if id_gen is None:
            id_gen = IdGenerator(max((t.id for t in self._tasks), default=0))
        self._id_gen = id_gen

    @property
    def id_gen(self) -> IdGenerator:
        return self._id_gen

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    # ---- commands ----

    def add(self, title: str, priority: str | Priority | None = None) -> Task:
        with self._lock:
            task = Task.new(self._id_gen.next_id(), title, priority)
            self._tasks.append(task)
            logger.debug("Task added id=%s priority=%s", task.id, task.priority)
            return replace(task)

    def list(self) -> list[Task]:
        with self._lock:
            return [replace(t) for t in self._tasks]

    def mark_done(self, task_id: int) -> tuple[MarkDoneStatus, Task | None]:
        with self._lock:
            for task in self._tasks:
                if task.id != task_id:
                    continue
                if task.done:
                    return MarkDoneStatus.ALREADY_DONE, replace(task)
                task.done = True
                return MarkDoneStatus.MARKED, replace(task)
        return MarkDoneStatus.NOT_FOUND, None

    def delete(self, task_id: int) -> Task | None:
        with self._lock:
            for i, task in enumerate(self._tasks):
                if task.id == task_id:
                    self._tasks[i] = self._tasks[-1]
                    self._tasks.pop()
                    return task
        return None

    # ---- background / shutdown helpers ----

    def completed(self) -> list[Task]:
        """Copies of all done tasks (lock held only while copying)."""
        with self._lock:
            return [replace(t) for t in self._tasks if t.done]

    def save(self, path: str | Path) -> None:
        """
        Atomically rewrite `path` with the current tasks.

        Holds the lock across the write; only meant for the final save when
        no more commands are being processed.
        """
        with self._lock:
            save_tasks(path, self._tasks)
            logger.info("Saved %d tasks to %s", len(self._tasks), path)
