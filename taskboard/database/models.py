"""SQLAlchemy database models for taskboard."""

from datetime import datetime, timezone
from typing import Optional, Type, TypeVar, Union

from sqlalchemy import Column, DateTime, Float, Integer, JSON, String, Text

from taskboard.database.database import Base
from taskboard.models.task import Task, TaskPriority, TaskStatus, as_utc

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string)."""
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def value_to_enum(value: str, enum_class: Type[T], default: T) -> T:
    """Convert string to enum with fallback to default.

    Args:
        value: String value to convert
        enum_class: Enum class to convert to
        default: Default enum value if conversion fails

    Returns:
        Enum instance, or default if conversion fails
    """
    if not value:
        return default
    try:
        return enum_class(value.lower())
    except (ValueError, AttributeError):
        return default


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Strip tzinfo after converting to UTC (columns store naive UTC)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class TaskDB(Base):
    """Database model for Task."""

    __tablename__ = "tasks"

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Basic fields
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(String(32), nullable=False, default=TaskStatus.TODO.value, index=True)
    priority = Column(String(16), nullable=False, default=TaskPriority.MEDIUM.value, index=True)
    owner = Column(String(80), nullable=False, default="unassigned", index=True)
    effort_hours = Column(Float, nullable=False, default=1.0)

    # Tags (stored as JSON array, display order preserved)
    tags = Column(JSON, nullable=False, default=list)

    # Timestamps (naive UTC)
    due_date = Column(DateTime, nullable=True)
    started_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    def to_pydantic(self) -> Task:
        """Convert database model to Pydantic model."""
        return Task(
            id=self.id,
            title=self.title,
            description=self.description or "",
            status=value_to_enum(self.status, TaskStatus, TaskStatus.TODO),
            priority=value_to_enum(self.priority, TaskPriority, TaskPriority.MEDIUM),
            owner=self.owner,
            effort_hours=self.effort_hours,
            tags=list(self.tags or []),
            due_date=as_utc(self.due_date),
            started_at=as_utc(self.started_at),
            completed_at=as_utc(self.completed_at),
            created_at=as_utc(self.created_at),
            updated_at=as_utc(self.updated_at),
        )

    def apply_pydantic(self, task: Task) -> None:
        """Copy the mutable fields of a Pydantic task onto this row."""
        self.title = task.title
        self.description = task.description
        self.status = enum_to_value(task.status)
        self.priority = enum_to_value(task.priority)
        self.owner = task.owner
        self.effort_hours = task.effort_hours
        self.tags = list(task.tags)
        self.due_date = to_naive_utc(task.due_date)
        self.started_at = to_naive_utc(task.started_at)
        self.completed_at = to_naive_utc(task.completed_at)
        self.updated_at = to_naive_utc(task.updated_at)

    @classmethod
    def from_pydantic(cls, task: Task) -> "TaskDB":
        """Create database model from Pydantic model."""
        task_db = cls(created_at=to_naive_utc(task.created_at))
        if task.id is not None:
            task_db.id = task.id
        task_db.apply_pydantic(task)
        return task_db
