# src/taskm/tasks/id_generator.py

from __future__ import annotations

import threading


class IdGenerator:
    """
    Monotonic task id allocator.

    Ids are never reused; gaps are fine (deleted or archived tasks keep
    their ids). The counter never moves backwards.
    """

    def __init__(self, max_observed_id: int = 0) -> None:
        self._lock = threading.Lock()
        self._next = max(0, int(max_observed_id)) + 1

    def next_id(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value

    def advance(self, candidate: int) -> None:
        """Make sure `candidate` will never be issued: next becomes candidate + 1 if needed."""
        with self._lock:
            if candidate >= self._next:
                self._next = candidate + 1

    def peek(self) -> int:
        with self._lock:
            return self._next
