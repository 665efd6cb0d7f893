# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskm.config import Settings
from taskm.core.state import AppState
from taskm.tasks.archiver import Archiver
from taskm.tasks.task_models import Priority
from taskm.tasks.task_store import TaskStore

from .fakes import RecordingActivityLog


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings pointing every file at tmp_path.

    Built directly rather than via from_env() to keep tests independent of
    the caller's environment and any .env file.
    """
    return Settings(
        app_name="taskm-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        tasks_path=tmp_path / "tasks.txt",
        archive_path=tmp_path / "archive.txt",
        log_path=tmp_path / "log.txt",
        log_buffer=100,
        archive_interval_seconds=0.05,
        shutdown_timeout_seconds=2.0,
        default_priority=Priority.MEDIUM,
        wait_for_signal=False,
    )


@pytest.fixture()
def store() -> TaskStore:
    return TaskStore()


@pytest.fixture()
def state(settings: Settings, store: TaskStore) -> AppState:
    """
    AppState with a recording activity log and no running workers.

    Command handler tests only care about store mutations and log lines.
    """
    return AppState(
        settings=settings,
        store=store,
        activity=RecordingActivityLog(),
        archiver=Archiver(store, settings.archive_path, interval_seconds=settings.archive_interval_seconds),
    )
