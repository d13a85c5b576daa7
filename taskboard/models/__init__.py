"""Data models for taskboard."""

from taskboard.models.task import (
    Task,
    AnnotatedTask,
    TaskCreate,
    TaskUpdate,
    TaskFilters,
    TaskStatus,
    TaskPriority,
    RiskLevel,
    SortField,
    SortOrder,
)
from taskboard.models.insights import Insights

__all__ = [
    "Task",
    "AnnotatedTask",
    "TaskCreate",
    "TaskUpdate",
    "TaskFilters",
    "TaskStatus",
    "TaskPriority",
    "RiskLevel",
    "SortField",
    "SortOrder",
    "Insights",
]
