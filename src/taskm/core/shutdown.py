# src/taskm/core/shutdown.py

"""
Shutdown sequence.

1. cancel background workers (shared cancel event)
2. wait for them, bounded
3. save the task list (full atomic rewrite, under the store lock)
4. close the activity log for new messages
5. wait again, bounded

Best-effort: timeouts and save failures are logged and reported, never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..errors import StorageError
from .state import AppState

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ShutdownReport:
    workers_stopped: bool
    saved: bool
    final_wait_ok: bool
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.workers_stopped and self.saved and self.final_wait_ok


def shutdown(state: AppState, *, timeout: float | None = None) -> ShutdownReport:
    if timeout is None:
        timeout = state.settings.shutdown_timeout_seconds

    logger.info("Shutting down: waiting for background workers (timeout=%.1fs)...", timeout)
    state.cancel.set()

    workers_stopped = state.workers.wait(timeout)
    if workers_stopped:
        logger.info("Background workers stopped.")
    else:
        logger.error("Timed out after %.1fs waiting for background workers (%d still running)",
                     timeout, state.workers.active)

    saved = True
    error: str | None = None
    try:
        state.store.save(state.settings.tasks_path)
    except StorageError as exc:
        saved = False
        error = str(exc)
        logger.error("Failed to save tasks: %s", exc)

    state.activity.close()

    final_wait_ok = state.workers.wait(timeout)
    if not final_wait_ok:
        logger.error("Background workers still running after %.1fs; exiting anyway", timeout)

    return ShutdownReport(
        workers_stopped=workers_stopped,
        saved=saved,
        final_wait_ok=final_wait_ok,
        error=error,
    )
