# src/taskm/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- ensures the storage directory exists,
- opens and starts the activity log (fatal on failure),
- loads the task file into a TaskStore,
- starts the archiver,
- wires everything into AppState.
"""

from __future__ import annotations

import logging
import threading

from ..async_logger import AsyncLogger
from ..config import Settings, get_settings
from ..core.ports import ActivityLog
from ..core.state import AppState
from ..core.workers import WorkerGroup
from ..errors import StorageError
from ..tasks.archiver import Archiver
from ..tasks.codec import load_tasks
from ..tasks.id_generator import IdGenerator
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)
    settings.archive_path.parent.mkdir(parents=True, exist_ok=True)
    settings.log_path.parent.mkdir(parents=True, exist_ok=True)


def load_store(settings: Settings, activity: ActivityLog) -> TaskStore:
    """
    Build the TaskStore from the task file.

    A load failure is not fatal: it is logged and we start with no tasks.
    """
    try:
        tasks, max_id = load_tasks(settings.tasks_path)
    except StorageError as exc:
        logger.error("Failed to load tasks: %s", exc)
        activity.log(f"Failed to load tasks: {exc}")
        tasks, max_id = [], 0
    else:
        activity.log(f"Loaded {len(tasks)} tasks. Max task ID: {max_id}")

    store = TaskStore(tasks, id_gen=IdGenerator(max_id))
    logger.info("TaskStore ready path=%s total=%d next_id=%d", settings.tasks_path, len(store), store.id_gen.peek())
    return store


def create_initial_state(*, settings: Settings | None = None) -> AppState:
    """
    Create AppState and start the background workers.

    Raises OSError if the storage directory can't be created or the activity
    log can't be opened; the CLI treats both as fatal.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    cancel = threading.Event()
    workers = WorkerGroup()

    activity = AsyncLogger(settings.log_path, settings.log_buffer)
    activity.start(cancel, workers)
    activity.log("Application starting")

    store = load_store(settings, activity)

    archiver = Archiver(store, settings.archive_path, interval_seconds=settings.archive_interval_seconds)
    archiver.start(cancel, workers)

    return AppState(
        settings=settings,
        store=store,
        activity=activity,
        archiver=archiver,
        cancel=cancel,
        workers=workers,
    )
