# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field

from taskm.core.ports import ActivityLog


@dataclass(slots=True)
class RecordingActivityLog(ActivityLog):
    """
    Synchronous ActivityLog for handler tests.

    - Captures messages for assertions
    - Mirrors AsyncLogger's "dropped after close" behaviour
    """

    messages: list[str] = field(default_factory=list)
    closed: bool = False

    def log(self, message: str) -> bool:
        if self.closed:
            return False
        self.messages.append(message)
        return True

    def close(self) -> None:
        self.closed = True
