# tests/test_config.py

from __future__ import annotations

import os
from pathlib import Path

import pytest

from taskm.config import Settings
from taskm.tasks.task_models import Priority


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    # No stray .env and no inherited TASKM_* variables.
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("TASKM_"):
            monkeypatch.delenv(name)
    return monkeypatch


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    s = Settings.from_env()

    assert s.data_dir == Path("storage")
    assert s.tasks_path == Path("storage") / "tasks.txt"
    assert s.archive_path == Path("storage") / "archive.txt"
    assert s.log_path == Path("storage") / "log.txt"
    assert s.log_buffer == 100
    assert s.archive_interval_seconds == 30.0
    assert s.shutdown_timeout_seconds == 10.0
    assert s.default_priority is Priority.MEDIUM
    assert s.wait_for_signal is True


def test_overrides_and_malformed_values(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("TASKM_DATA_DIR", str(tmp_path / "data"))
    clean_env.setenv("TASKM_LOG_BUFFER", "not-a-number")
    clean_env.setenv("TASKM_ARCHIVE_INTERVAL", "0.5")
    clean_env.setenv("TASKM_DEFAULT_PRIORITY", "HIGH")
    clean_env.setenv("TASKM_WAIT_FOR_SIGNAL", "off")

    s = Settings.from_env()

    assert s.tasks_path == tmp_path / "data" / "tasks.txt"
    assert s.log_buffer == 100
    assert s.archive_interval_seconds == 0.5
    assert s.default_priority is Priority.HIGH
    assert s.wait_for_signal is False


def test_dotenv_file_is_loaded(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # load_dotenv writes os.environ directly; register the key so teardown removes it.
    clean_env.setenv("TASKM_LOG_BUFFER", "")
    clean_env.delenv("TASKM_LOG_BUFFER")
    (tmp_path / ".env").write_text("TASKM_LOG_BUFFER=7\n", "utf-8")

    assert Settings.from_env().log_buffer == 7
