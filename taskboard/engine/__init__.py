"""Scoring and insights engine for taskboard."""

from taskboard.engine.scoring import (
    utc_now,
    compute_risk,
    compute_score,
    compute_age_hours,
    compute_cycle_hours,
    annotate_task,
)
from taskboard.engine.ranking import normalize_sort, sort_tasks
from taskboard.engine.insights import compute_insights
from taskboard.engine.transitions import (
    ALLOWED_TRANSITIONS,
    apply_status_transition,
    is_reopen,
    requires_confirmation,
)

__all__ = [
    "utc_now",
    "compute_risk",
    "compute_score",
    "compute_age_hours",
    "compute_cycle_hours",
    "annotate_task",
    "normalize_sort",
    "sort_tasks",
    "compute_insights",
    "apply_status_transition",
    "is_reopen",
    "requires_confirmation",
    "ALLOWED_TRANSITIONS",
]
