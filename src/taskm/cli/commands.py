# src/taskm/cli/commands.py

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.state import AppState
from ..tasks.task_models import Priority, Task
from ..tasks.task_store import MarkDoneStatus

logger = logging.getLogger(__name__)

LIST_TIME_FORMAT = "%Y-%m-%d %H:%M"


@dataclass(slots=True, frozen=True)
class CommandReply:
    """What a handler wants printed; `error` replies go to stderr."""

    text: str
    error: bool = False


def sort_for_listing(tasks: list[Task]) -> list[Task]:
    return sorted(tasks, key=Task.listing_key)


def format_task_list(tasks: list[Task]) -> str:
    """Tasks grouped by priority (high first), oldest first within a group."""
    lines = ["-------------------- TASKS --------------------"]
    current: Priority | None = None
    for t in sort_for_listing(tasks):
        if t.priority != current:
            lines.append("")
            lines.append(f"--- Priority: {t.priority} ---")
            current = t.priority
        status = "Done" if t.done else "Pending"
        created = t.created_at.strftime(LIST_TIME_FORMAT)
        lines.append(f"  ID: {t.id:<4d} | Status: {status:<7s} | Created: {created} | Title: {t.title}")
    lines.append("-----------------------------------------------")
    return "\n".join(lines)


def cmd_add(state: AppState, title: str, priority: str | None = None) -> list[CommandReply]:
    replies: list[CommandReply] = []
    default = state.settings.default_priority

    if priority is None:
        resolved = default
    else:
        parsed = Priority.parse(priority)
        if parsed is None:
            replies.append(
                CommandReply(f"Warning: invalid priority '{priority}'. Using default '{default}'.", error=True)
            )
            state.activity.log(f"Invalid priority '{priority}', using '{default}'")
            resolved = default
        else:
            resolved = parsed

    task = state.store.add(title, resolved)
    state.activity.log(f'Task added ID {task.id}: "{task.title}" priority: {task.priority}')
    replies.append(CommandReply(f"Task added with ID {task.id}."))
    return replies


def cmd_list(state: AppState) -> list[CommandReply]:
    tasks = state.store.list()
    if not tasks:
        state.activity.log("Listed tasks: none found.")
        return [CommandReply("No tasks found.")]

    state.activity.log(f"Listed {len(tasks)} tasks.")
    return [CommandReply(format_task_list(tasks))]


def cmd_done(state: AppState, task_id: int) -> list[CommandReply]:
    status, task = state.store.mark_done(task_id)

    if status is MarkDoneStatus.ALREADY_DONE:
        state.activity.log(f"Attempted to mark task ID {task_id} as done, but it was already done.")
        return [CommandReply(f"Task with ID {task_id} is already marked as done.")]

    if status is MarkDoneStatus.NOT_FOUND or task is None:
        state.activity.log(f"Failed to mark task ID {task_id} as done: not found.")
        return [CommandReply(f"Error: Task with ID {task_id} not found.", error=True)]

    state.activity.log(f'Marked task ID {task.id} as done: "{task.title}"')
    return [CommandReply(f"Marked task with ID {task_id} as done.")]


def cmd_delete(state: AppState, task_id: int) -> list[CommandReply]:
    task = state.store.delete(task_id)
    if task is None:
        state.activity.log(f"Failed to delete task ID {task_id}: not found.")
        return [CommandReply(f"Error: Task with ID {task_id} not found for deletion.", error=True)]

    state.activity.log(f'Deleted task ID {task.id}: "{task.title}"')
    return [CommandReply(f"Deleted task with ID {task_id}.")]
