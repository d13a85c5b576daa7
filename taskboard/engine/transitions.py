"""Status transition rules for taskboard.

Keeps `startedAt`/`completedAt` consistent with the status a task moves into.
Moves outside ALLOWED_TRANSITIONS, including every reopen of a completed task,
require an explicit `force`.
"""

from datetime import datetime
from typing import Dict, FrozenSet

from taskboard.errors import ConflictError
from taskboard.models.task import Task, TaskStatus

# Moves that need no confirmation. A done task has none.
ALLOWED_TRANSITIONS: Dict[TaskStatus, FrozenSet[TaskStatus]] = {
    TaskStatus.TODO: frozenset({TaskStatus.IN_PROGRESS, TaskStatus.BLOCKED}),
    TaskStatus.IN_PROGRESS: frozenset({TaskStatus.BLOCKED, TaskStatus.DONE}),
    TaskStatus.BLOCKED: frozenset({TaskStatus.IN_PROGRESS, TaskStatus.TODO}),
    TaskStatus.DONE: frozenset(),
}


def is_reopen(current: TaskStatus, target: TaskStatus) -> bool:
    """Whether moving from `current` to `target` reopens a completed task."""
    return current == TaskStatus.DONE and target != TaskStatus.DONE


def requires_confirmation(current: TaskStatus, target: TaskStatus) -> bool:
    """Whether moving from `current` to `target` needs `force`."""
    if current == target:
        return False
    return target not in ALLOWED_TRANSITIONS[current]


def apply_status_transition(task: Task, target: TaskStatus, now: datetime, force: bool = False) -> Task:
    """Move `task` to `target`, stamping or clearing its timestamps in place.

    Raises:
        ConflictError: If the move needs confirmation and `force` is not set
    """
    if task.status == target:
        return task

    if not force and requires_confirmation(task.status, target):
        if is_reopen(task.status, target):
            raise ConflictError("reopening a completed task requires confirmation")
        raise ConflictError(
            f"moving a task from {task.status.value} to {target.value} requires confirmation"
        )

    if is_reopen(task.status, target):
        # A reopened task starts a fresh cycle measurement.
        task.started_at = None
        task.completed_at = None

    if target == TaskStatus.IN_PROGRESS:
        if task.started_at is None:
            task.started_at = now
        task.completed_at = None
    elif target == TaskStatus.DONE:
        if task.started_at is None:
            task.started_at = now
        task.completed_at = now
    elif target == TaskStatus.TODO:
        task.started_at = None
        task.completed_at = None
    elif target == TaskStatus.BLOCKED:
        task.completed_at = None
    else:
        raise ValueError(f"unhandled status: {target}")

    task.status = target
    return task
