"""Insights data model for taskboard."""

from typing import Dict

from pydantic import Field

from taskboard.models.task import CamelModel


class Insights(CamelModel):
    """Aggregate snapshot over a filtered task set (never persisted)."""

    total: int = 0
    by_status: Dict[str, int] = Field(default_factory=dict)
    by_priority: Dict[str, int] = Field(default_factory=dict)
    overdue: int = 0
    at_risk: int = 0
    blocked: int = 0
    done: int = 0
    average_age_hours: float = 0.0
    average_cycle_hours: float = 0.0
    workload_hours: float = 0.0
    focus_index: float = Field(0.0, ge=0.0, le=1.0)
