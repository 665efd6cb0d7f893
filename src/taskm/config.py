# src/taskm/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Variables (all optional):

    TASKM_APP_NAME           display name (default: taskm)
    TASKM_LOG_LEVEL          console diagnostics level (default: INFO)
    TASKM_DATA_DIR           directory for all files (default: storage)
    TASKM_TASKS_PATH         task file (default: <data_dir>/tasks.txt)
    TASKM_ARCHIVE_PATH       archive file (default: <data_dir>/archive.txt)
    TASKM_LOG_PATH           activity log (default: <data_dir>/log.txt)
    TASKM_LOG_BUFFER         activity log queue size (default: 100)
    TASKM_ARCHIVE_INTERVAL   archiver period, seconds (default: 30)
    TASKM_SHUTDOWN_TIMEOUT   each shutdown wait, seconds (default: 10)
    TASKM_DEFAULT_PRIORITY   priority for --add without --priority (default: medium)
    TASKM_WAIT_FOR_SIGNAL    keep running until SIGINT/SIGTERM (default: true)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .tasks.task_models import Priority

ENV_PREFIX = "TASKM"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Files ----
    data_dir: Path
    tasks_path: Path
    archive_path: Path
    log_path: Path

    # ---- Background workers ----
    log_buffer: int
    archive_interval_seconds: float
    shutdown_timeout_seconds: float

    # ---- CLI behaviour ----
    default_priority: Priority
    wait_for_signal: bool

    @staticmethod
    def from_env() -> Settings:
        load_dotenv(find_dotenv(usecwd=True), override=False)

        app_name = _env(_k("APP_NAME"), "taskm").strip() or "taskm"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path("storage"))
        tasks_path = _env_path(_k("TASKS_PATH"), data_dir / "tasks.txt")
        archive_path = _env_path(_k("ARCHIVE_PATH"), data_dir / "archive.txt")
        log_path = _env_path(_k("LOG_PATH"), data_dir / "log.txt")

        log_buffer = max(1, _env_int(_k("LOG_BUFFER"), 100))
        archive_interval_seconds = _env_float(_k("ARCHIVE_INTERVAL"), 30.0)
        if archive_interval_seconds <= 0:
            archive_interval_seconds = 30.0
        shutdown_timeout_seconds = max(0.0, _env_float(_k("SHUTDOWN_TIMEOUT"), 10.0))

        default_priority = Priority.coerce(_env(_k("DEFAULT_PRIORITY"), "medium").strip().lower())
        wait_for_signal = _env_bool(_k("WAIT_FOR_SIGNAL"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            tasks_path=tasks_path,
            archive_path=archive_path,
            log_path=log_path,
            log_buffer=log_buffer,
            archive_interval_seconds=archive_interval_seconds,
            shutdown_timeout_seconds=shutdown_timeout_seconds,
            default_priority=default_priority,
            wait_for_signal=wait_for_signal,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
