# src/taskm/core/workers.py

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class WorkerGroup:
    """
    Counting join over background threads.

    Each spawned worker counts as one until its target returns (or raises).
    wait() blocks until the count drops to zero or the timeout expires.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._active = 0

    @property
    def active(self) -> int:
        with self._cond:
            return self._active

    def spawn(self, name: str, target: Callable[[], None]) -> threading.Thread:
        def runner() -> None:
            try:
                target()
            except Exception:
                logger.exception("Worker %s crashed", name)
            finally:
                with self._cond:
                    self._active -= 1
                    self._cond.notify_all()
                logger.debug("Worker %s finished", name)

        with self._cond:
            self._active += 1

        t = threading.Thread(target=runner, name=f"taskm-{name}", daemon=True)
        t.start()
        logger.debug("Worker %s started", name)
        return t

    def wait(self, timeout: float | None = None) -> bool:
        """True if every worker finished within `timeout` seconds."""
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while self._active > 0:
                if deadline is None:
                    self._cond.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return False
                self._cond.wait(remaining)
            return True
