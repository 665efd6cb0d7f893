# src/taskm/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from ..config import Settings
from ..tasks.archiver import Archiver
from ..tasks.task_store import TaskStore
from .ports import ActivityLog
from .workers import WorkerGroup


@dataclass
class AppState:
    """
    Everything a command handler or background worker needs.

    Built once by the bootstrap code and passed by reference; there is no
    module-level task list or logger.
    """

    settings: Settings
    store: TaskStore
    activity: ActivityLog
    archiver: Archiver

    cancel: threading.Event = field(default_factory=threading.Event)
    workers: WorkerGroup = field(default_factory=WorkerGroup)
