"""Task store: the create/read/update/delete contract of taskboard.

Owns the task lifecycle (validation, status transitions, timestamps) on top of
the repository, and returns tasks annotated by the scoring engine. The engine
only reads; nothing it derives is persisted.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from taskboard.database.repository import TaskRepository
from taskboard.engine.insights import compute_insights
from taskboard.engine.ranking import sort_tasks
from taskboard.engine.scoring import annotate_task, utc_now
from taskboard.engine.transitions import apply_status_transition, requires_confirmation
from taskboard.errors import ConflictError, NotFoundError
from taskboard.models.insights import Insights
from taskboard.models.task import AnnotatedTask, Task, TaskCreate, TaskFilters, TaskUpdate, as_utc
from taskboard.models.task_factory import (
    create_task_base,
    normalize_effort,
    normalize_owner,
    normalize_priority,
    normalize_status,
    normalize_tags,
    normalize_title,
)
from taskboard.service.locking import LockTimeout, RecordLocks, task_locks

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT_SEC = 10.0


class TaskStore:
    """Request-scoped task store.

    Args:
        repository: Repository bound to the request's database session
        now_fn: Clock returning an aware UTC datetime
        locks: Per-task lock registry shared across requests
        lock_timeout: Seconds to wait for a task lock before giving up
    """

    def __init__(
        self,
        repository: TaskRepository,
        now_fn: Callable[[], datetime] = utc_now,
        locks: RecordLocks = task_locks,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT_SEC,
    ):
        self.repository = repository
        self.now_fn = now_fn
        self.locks = locks
        self.lock_timeout = lock_timeout

    def _now(self) -> datetime:
        return as_utc(self.now_fn())

    def _annotate(self, tasks: List[Task], now: datetime) -> List[AnnotatedTask]:
        return [annotate_task(task, now) for task in tasks]

    def list(self, filters: Optional[TaskFilters] = None) -> List[AnnotatedTask]:
        """Return the matching tasks, annotated and sorted."""
        filters = filters or TaskFilters()
        now = self._now()
        annotated = self._annotate(self.repository.list(filters), now)
        return sort_tasks(annotated, filters.sort_by, filters.order)

    def insights(self, filters: Optional[TaskFilters] = None) -> Insights:
        """Aggregate insights over the tasks matching the filters."""
        filters = filters or TaskFilters()
        now = self._now()
        return compute_insights(self._annotate(self.repository.list(filters), now))

    def get(self, task_id: int) -> AnnotatedTask:
        task = self.repository.get(task_id)
        if task is None:
            raise NotFoundError(f"task {task_id} not found")
        return annotate_task(task, self._now())

    def create(self, payload: TaskCreate) -> AnnotatedTask:
        """Validate and persist a new task.

        Raises:
            ValidationError: If the payload is invalid (nothing is persisted)
        """
        now = self._now()
        task = create_task_base(payload, now)
        status = normalize_status(payload.status)
        apply_status_transition(task, status, now, force=True)

        created = self.repository.create(task)
        logger.info(f"Created task {created.id} ({created.status.value}, {created.priority.value})")
        return annotate_task(created, now)

    def update(self, task_id: int, payload: TaskUpdate, force: bool = False) -> AnnotatedTask:
        """Apply a partial update under the task's lock.

        Raises:
            NotFoundError: If the task does not exist
            ValidationError: If a provided field is invalid
            ConflictError: On a reopen without `force`, or if the task lock
                cannot be acquired in time
        """
        try:
            with self.locks.hold(task_id, self.lock_timeout):
                return self._update_locked(task_id, payload, force)
        except LockTimeout as e:
            logger.warning(f"Update of task {task_id} timed out waiting for lock")
            raise ConflictError("task is being updated by another request; try again") from e

    def _update_locked(self, task_id: int, payload: TaskUpdate, force: bool) -> AnnotatedTask:
        task = self.repository.get(task_id, for_update=True)
        if task is None:
            self.repository.release()
            raise NotFoundError(f"task {task_id} not found")

        now = self._now()
        try:
            self._apply_update(task, payload, force, now)
        except Exception:
            self.repository.release()
            raise

        updated = self.repository.update(task)
        return annotate_task(updated, now)

    def _apply_update(self, task: Task, payload: TaskUpdate, force: bool, now: datetime) -> None:
        if payload.provided("title"):
            task.title = normalize_title(payload.title)
        if payload.provided("description"):
            task.description = (payload.description or "").strip()
        if payload.provided("priority") and payload.priority is not None:
            task.priority = normalize_priority(payload.priority)
        if payload.provided("owner"):
            task.owner = normalize_owner(payload.owner)
        if payload.provided("effort_hours") and payload.effort_hours is not None:
            task.effort_hours = normalize_effort(payload.effort_hours)
        if payload.provided("due_date"):
            task.due_date = as_utc(payload.due_date)
        if payload.provided("tags"):
            task.tags = normalize_tags(payload.tags)
        if payload.provided("status") and payload.status is not None:
            target = normalize_status(payload.status)
            if requires_confirmation(task.status, target) and not force:
                logger.info(
                    f"Task {task.id} move {task.status.value} -> {target.value} rejected: confirmation required"
                )
            apply_status_transition(task, target, now, force=force)
        task.updated_at = now

    def delete(self, task_id: int) -> None:
        """Permanently delete a task.

        Raises:
            NotFoundError: If the task does not exist (including a repeat delete)
        """
        try:
            with self.locks.hold(task_id, self.lock_timeout):
                if not self.repository.delete(task_id):
                    raise NotFoundError(f"task {task_id} not found")
        except LockTimeout as e:
            raise ConflictError("task is being updated by another request; try again") from e
        logger.info(f"Deleted task {task_id}")
