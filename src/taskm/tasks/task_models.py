# src/taskm/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class Priority(StrEnum):
    """
    Task priority.

    Textual input outside the three members is never stored: `coerce`
    maps it to MEDIUM.
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @classmethod
    def parse(cls, raw: str | None) -> Priority | None:
        """Exact match on the stored spelling; None if unrecognized."""
        if raw is None:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None

    @classmethod
    def coerce(cls, raw: str | Priority | None) -> Priority:
        if isinstance(raw, Priority):
            return raw
        parsed = cls.parse(raw)
        return cls.MEDIUM if parsed is None else parsed


_PRIORITY_RANK = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


def now_seconds() -> datetime:
    """Current local time truncated to whole seconds (the stored resolution)."""
    return datetime.now().replace(microsecond=0)


@dataclass(slots=True)
class Task:
    id: int
    title: str
    done: bool
    created_at: datetime
    priority: Priority

    @classmethod
    def new(cls, task_id: int, title: str, priority: str | Priority | None = None) -> Task:
        return cls(
            id=task_id,
            title=title,
            done=False,
            created_at=now_seconds(),
            priority=Priority.coerce(priority),
        )

    def listing_key(self) -> tuple[int, datetime]:
        """Sort key: higher priority first, then oldest first."""
        return (-self.priority.rank, self.created_at)
