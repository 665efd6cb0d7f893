# tests/test_logging_setup.py

from __future__ import annotations

import logging

import pytest

from taskm.logging_setup import _ConsoleNoiseFilter


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.makeLogRecord({"name": name, "levelno": level, "levelname": logging.getLevelName(level)})


@pytest.mark.parametrize(
    ("name", "level", "shown"),
    [
        ("taskm.cli.main", logging.DEBUG, True),
        ("taskm.tasks.codec", logging.WARNING, True),
        ("taskm", logging.INFO, True),
        ("taskm.tasks.archiver", logging.INFO, False),
        ("taskm.tasks.archiver", logging.ERROR, True),
        ("taskm.async_logger", logging.DEBUG, False),
        ("taskm.async_logger", logging.WARNING, True),
        ("taskm.core.workers", logging.INFO, False),
        ("taskm.core.workersx", logging.INFO, True),
        ("taskmother", logging.WARNING, False),
        ("py.warnings", logging.WARNING, False),
        ("urllib3", logging.ERROR, True),
    ],
)
def test_console_filter(name: str, level: int, shown: bool) -> None:
    assert _ConsoleNoiseFilter().filter(_record(name, level)) is shown
