"""Repository layer for database operations."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from taskboard.models.task import Task, TaskFilters
from taskboard.database.models import TaskDB, enum_to_value

logger = logging.getLogger(__name__)


class TaskRepository:
    """Repository for Task database operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, task: Task) -> Task:
        """Insert a new task; the database assigns its id."""
        try:
            task_db = TaskDB.from_pydantic(task)
            self.db.add(task_db)
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Created task {task_db.id}: {task.title[:50]}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create task: {type(e).__name__}: {str(e)}")
            raise

    def get(self, task_id: int, for_update: bool = False) -> Optional[Task]:
        """Get task by ID.

        With `for_update`, the row is locked until the session commits on
        databases that support `SELECT ... FOR UPDATE`.
        """
        query = self.db.query(TaskDB).filter(TaskDB.id == task_id)
        if for_update:
            query = query.with_for_update()
        task_db = query.first()
        return task_db.to_pydantic() if task_db else None

    def list(self, filters: TaskFilters) -> List[Task]:
        """Get all tasks matching the filters (AND semantics), unordered.

        Status and priority predicates run in SQL. Owner, tag and free-text
        predicates compare casefolded text on the loaded rows: SQLite's
        LOWER/LIKE only fold ASCII, and tags are stored as JSON.
        """
        query = self.db.query(TaskDB)
        if filters.statuses:
            query = query.filter(TaskDB.status.in_([enum_to_value(s) for s in filters.statuses]))
        if filters.priorities:
            query = query.filter(TaskDB.priority.in_([enum_to_value(p) for p in filters.priorities]))

        tasks = [task_db.to_pydantic() for task_db in query.all()]

        owner = filters.owner.strip().casefold()
        if owner:
            tasks = [task for task in tasks if task.owner.casefold() == owner]

        tag = filters.tag.strip().casefold()
        if tag:
            tasks = [task for task in tasks if tag in (t.casefold() for t in task.tags)]

        text = filters.query.strip().casefold()
        if text:
            tasks = [
                task for task in tasks
                if text in task.title.casefold() or text in task.description.casefold()
            ]
        return tasks

    def update(self, task: Task) -> Task:
        """Update an existing task."""
        task_db = self.db.query(TaskDB).filter(TaskDB.id == task.id).first()
        if not task_db:
            raise ValueError(f"Task {task.id} not found")

        task_db.apply_pydantic(task)

        try:
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Updated task {task.id}: {task.title[:50]}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update task {task.id}: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, task_id: int) -> bool:
        """Permanently delete a task by ID."""
        task_db = self.db.query(TaskDB).filter(TaskDB.id == task_id).first()
        if not task_db:
            return False

        try:
            self.db.delete(task_db)
            self.db.commit()
            logger.debug(f"Deleted task {task_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete task {task_id}: {type(e).__name__}: {str(e)}")
            raise

    def release(self) -> None:
        """End the current transaction without changes (drops row locks)."""
        self.db.rollback()
