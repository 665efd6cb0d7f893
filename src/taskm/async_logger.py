# src/taskm/async_logger.py

from __future__ import annotations

import logging
import queue
import threading
from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import TextIO

from .core.workers import WorkerGroup

logger = logging.getLogger(__name__)

LOG_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class LoggerState(StrEnum):
    RUNNING = "running"
    DRAINING = "draining"
    STOPPED = "stopped"


class AsyncLogger:
    """
    Activity log written by a single background worker.

    Producers call log(), which never blocks:
    - queue full        -> message dropped, warning emitted
    - after close()     -> message dropped, warning emitted
    - worker stopped    -> message dropped, warning emitted

    Shutdown is two independent switches:
    - close() only stops accepting new messages (idempotent);
    - the cancel event makes the worker drain what is left, close the file
      and stop.
    """

    def __init__(self, path: str | Path, buffer_size: int = 100, *, poll_interval: float = 0.05) -> None:
        self.path = Path(path)
        # Raises OSError if the file can't be opened; callers treat that as fatal.
        self._file: TextIO = self.path.open("a", encoding="utf-8")
        self._queue: queue.Queue[str] = queue.Queue(maxsize=max(1, int(buffer_size)))
        self._poll_interval = max(0.001, float(poll_interval))

        self._mu = threading.Lock()
        self._closed = False
        self._state = LoggerState.RUNNING
        self._stopped = threading.Event()

    @property
    def state(self) -> LoggerState:
        with self._mu:
            return self._state

    @property
    def closed(self) -> bool:
        with self._mu:
            return self._closed

    def start(self, cancel: threading.Event, workers: WorkerGroup) -> None:
        workers.spawn("logger", lambda: self._run(cancel))
        logger.debug("Activity logger started path=%s", self.path)

    def log(self, message: str) -> bool:
        """Try to enqueue a message. Returns False if it was dropped."""
        with self._mu:
            if self._closed or self._state is LoggerState.STOPPED:
                logger.warning("Activity log closed, dropping message: %s", message)
                return False
            try:
                self._queue.put_nowait(message)
            except queue.Full:
                logger.warning("Activity log queue full, dropping message: %s", message)
                return False
            return True

    def close(self) -> None:
        with self._mu:
            if self._closed:
                return
            self._closed = True
        logger.debug("Activity logger closed for new messages (worker stops on cancel).")

    def wait_stopped(self, timeout: float | None = None) -> bool:
        return self._stopped.wait(timeout)

    # ---- worker ----

    def _write(self, message: str) -> None:
        ts = datetime.now().strftime(LOG_TIME_FORMAT)
        try:
            self._file.write(f"[{ts}] {message}\n")
            self._file.flush()
        except (OSError, ValueError):
            logger.exception("Failed to write to activity log %s", self.path)

    def _set_state(self, state: LoggerState) -> None:
        with self._mu:
            self._state = state

    def _run(self, cancel: threading.Event) -> None:
        try:
            while not cancel.is_set():
                try:
                    message = self._queue.get(timeout=self._poll_interval)
                except queue.Empty:
                    continue
                self._write(message)

            self._set_state(LoggerState.DRAINING)
            drained = 0
            while True:
                # Empty check and STOPPED share the lock so log() can't slip a message in between.
                with self._mu:
                    try:
                        message = self._queue.get_nowait()
                    except queue.Empty:
                        self._state = LoggerState.STOPPED
                        break
                self._write(message)
                drained += 1
            logger.debug("Activity logger drained %d pending messages", drained)
        finally:
            self._set_state(LoggerState.STOPPED)
            try:
                self._file.close()
            except OSError:
                logger.exception("Failed to close activity log %s", self.path)
            self._stopped.set()
