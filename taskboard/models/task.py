"""Task data models for taskboard."""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return an aware UTC datetime (naive values are taken to be UTC)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class TaskStatus(str, Enum):
    """Task status enumeration."""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    DONE = "done"


class TaskPriority(str, Enum):
    """Task priority enumeration."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RiskLevel(str, Enum):
    """Derived urgency classification of a task."""
    ON_TRACK = "on_track"
    AT_RISK = "at_risk"
    OVERDUE = "overdue"
    UNSCHEDULED = "unscheduled"
    BLOCKED = "blocked"
    COMPLETED = "completed"


class SortField(str, Enum):
    """Sort keys accepted by the task list."""
    SCORE = "score"
    PRIORITY = "priority"
    DUE_DATE = "due_date"
    UPDATED_AT = "updated_at"
    CREATED_AT = "created_at"
    TITLE = "title"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Task(CamelModel):
    """Canonical Task model."""

    id: Optional[int] = Field(None, description="Database-assigned task identifier (None until persisted)")
    title: str = Field(..., description="Task title")
    description: str = Field("", description="Free-form task description")
    status: TaskStatus = Field(TaskStatus.TODO, description="Task status")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="Task priority")
    owner: str = Field("unassigned", description="Owner name")
    effort_hours: float = Field(1, gt=0, description="Estimated effort in hours")
    tags: List[str] = Field(default_factory=list, description="Normalized tags in display order")
    due_date: Optional[datetime] = Field(None, description="Due date (UTC)")
    started_at: Optional[datetime] = Field(None, description="Set when work first started")
    completed_at: Optional[datetime] = Field(None, description="Set when the task was completed")
    created_at: datetime = Field(..., description="Task creation timestamp")
    updated_at: datetime = Field(..., description="Task last update timestamp")

    @field_validator("due_date", "started_at", "completed_at", "created_at", "updated_at")
    @classmethod
    def _normalize_timestamps(cls, v):
        return as_utc(v)


class AnnotatedTask(Task):
    """Task with the derived fields computed at read time."""

    risk: RiskLevel
    score: float
    age_hours: float
    cycle_hours: Optional[float] = None


class TaskCreate(CamelModel):
    """Payload for creating a task.

    Values are loosely typed here; normalization and validation of the
    individual fields happens in the task factory so that errors carry
    readable messages.
    """

    title: str = ""
    description: str = ""
    status: Optional[str] = None
    priority: Optional[str] = None
    owner: str = ""
    effort_hours: Optional[float] = None
    due_date: Optional[datetime] = None
    tags: Optional[List[str]] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def _blank_due_date(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class TaskUpdate(CamelModel):
    """Partial payload for updating a task.

    Only fields present in the request body are applied; an explicit null
    for `dueDate` or `tags` clears the value.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    owner: Optional[str] = None
    effort_hours: Optional[float] = None
    due_date: Optional[datetime] = None
    tags: Optional[List[str]] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def _blank_due_date(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def provided(self, field_name: str) -> bool:
        """Whether the field was present in the request body."""
        return field_name in self.model_fields_set


class TaskFilters(BaseModel):
    """Read-only query over the task set."""

    statuses: List[TaskStatus] = Field(default_factory=list)
    priorities: List[TaskPriority] = Field(default_factory=list)
    owner: str = ""
    tag: str = ""
    query: str = ""
    sort_by: SortField = SortField.SCORE
    order: SortOrder = SortOrder.DESC
