# src/taskm/errors.py

from __future__ import annotations


class TaskmError(Exception):
    """Base class for taskm errors."""


class StorageError(TaskmError):
    """Reading or writing a task file failed."""


class TaskLineError(TaskmError, ValueError):
    """A single line of a task file could not be decoded."""

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number
