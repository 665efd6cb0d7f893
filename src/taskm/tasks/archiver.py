# src/taskm/tasks/archiver.py

"""
Periodic archiver.

A small timer loop that, every interval_seconds:
- copies done tasks out of the store (lock held only while copying),
- appends them to the archive file.

The live store is never modified. A done task is appended again on every
tick until it is deleted by the user, so the archive is a history of
snapshots rather than a set.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from ..core.workers import WorkerGroup
from .codec import append_tasks
from .task_store import TaskStore

logger = logging.getLogger(__name__)


class Archiver:
    def __init__(self, store: TaskStore, archive_path: str | Path, *, interval_seconds: float = 30.0) -> None:
        self.store = store
        self.archive_path = Path(archive_path)
        self.interval_seconds = max(0.01, float(interval_seconds))

    def archive_completed_tasks(self) -> int:
        """Append a snapshot of done tasks. Returns how many were written."""
        done = self.store.completed()
        if not done:
            logger.debug("No completed tasks to archive.")
            return 0

        written = append_tasks(self.archive_path, done)
        logger.info("Archived %d completed tasks to %s", written, self.archive_path)
        return written

    def start(self, cancel: threading.Event, workers: WorkerGroup) -> None:
        workers.spawn("archiver", lambda: self.run(cancel))

    def run(self, cancel: threading.Event) -> None:
        """
        Tick until `cancel` is set.

        Failures are logged and retried on the next tick. No final pass on
        cancel: the shutdown save covers anything completed since the last tick.
        """
        logger.debug("Archiver running interval=%.2fs path=%s", self.interval_seconds, self.archive_path)
        while not cancel.wait(self.interval_seconds):
            try:
                self.archive_completed_tasks()
            except Exception:
                logger.exception("Archive tick failed")
        logger.debug("Archiver stopped.")
