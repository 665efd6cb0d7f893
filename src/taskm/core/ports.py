# src/taskm/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by command handlers and the shutdown sequence.

Handlers depend on these Protocols instead of concrete classes, which keeps
tests free of background threads where threads are not the point.
"""

from typing import Protocol


class ActivityLog(Protocol):
    """Non-blocking activity sink (AsyncLogger in production)."""

    def log(self, message: str) -> bool: ...
    def close(self) -> None: ...
