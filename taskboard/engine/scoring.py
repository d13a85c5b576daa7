"""Risk and score derivation for taskboard.

Every function here is a pure function of a task and an explicit `now`, so the
same inputs always produce the same outputs.
"""

from datetime import datetime, timezone
from typing import Optional

from taskboard.models.task import AnnotatedTask, RiskLevel, Task, TaskStatus
from taskboard.models.constants import (
    AGE_MAX_POINTS,
    AGE_POINTS_PER_DAY,
    AT_RISK_THRESHOLD_HOURS,
    BLOCKED_BONUS,
    DONE_PENALTY,
    EFFORT_POINTS_PER_HOUR,
    MAX_EFFORT_HOURS,
    PRIORITY_TIER_POINTS,
    PRIORITY_WEIGHTS,
    URGENCY_DUE_POINTS,
    URGENCY_HORIZON_HOURS,
    URGENCY_MAX_OVERDUE_POINTS,
    URGENCY_TAIL_POINTS,
)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _hours(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600.0


def compute_risk(task: Task, now: datetime) -> RiskLevel:
    """Classify a task's risk level.

    Rules are evaluated top-down and the first match wins:
    1. done -> completed
    2. blocked -> blocked
    3. no due date -> unscheduled
    4. due date in the past -> overdue
    5. due within AT_RISK_THRESHOLD_HOURS -> at_risk
    6. otherwise -> on_track
    """
    if task.status == TaskStatus.DONE:
        return RiskLevel.COMPLETED
    if task.status == TaskStatus.BLOCKED:
        return RiskLevel.BLOCKED
    if task.due_date is None:
        return RiskLevel.UNSCHEDULED
    if task.due_date < now:
        return RiskLevel.OVERDUE
    if _hours(now, task.due_date) <= AT_RISK_THRESHOLD_HOURS:
        return RiskLevel.AT_RISK
    return RiskLevel.ON_TRACK


def _urgency_points(task: Task, now: datetime) -> float:
    if task.due_date is None:
        return 0.0
    hours_left = _hours(now, task.due_date)
    if hours_left <= 0:
        overdue_points = min(-hours_left / 24.0, URGENCY_MAX_OVERDUE_POINTS)
        return URGENCY_DUE_POINTS + URGENCY_TAIL_POINTS + overdue_points
    if hours_left <= URGENCY_HORIZON_HOURS:
        return URGENCY_DUE_POINTS * (1.0 - hours_left / URGENCY_HORIZON_HOURS) + URGENCY_TAIL_POINTS
    # Past the horizon the tail decays towards zero but stays positive.
    return URGENCY_TAIL_POINTS * URGENCY_HORIZON_HOURS / hours_left


def _status_points(status: TaskStatus) -> float:
    if status == TaskStatus.BLOCKED:
        return BLOCKED_BONUS
    if status == TaskStatus.DONE:
        return -DONE_PENALTY
    if status in (TaskStatus.TODO, TaskStatus.IN_PROGRESS):
        return 0.0
    raise ValueError(f"unhandled status: {status}")


def compute_score(task: Task, now: datetime) -> float:
    """Compute the ranking score of a task.

    The priority tier contributes PRIORITY_TIER_POINTS per weight step; due
    date urgency, age, effort and status adjustments stay below one tier, so
    a higher priority always outranks a lower one while nearer due dates and
    older tasks rank higher within a tier. Completed tasks carry no urgency
    or age pressure.
    """
    score = float(PRIORITY_WEIGHTS[task.priority] * PRIORITY_TIER_POINTS)

    if task.status != TaskStatus.DONE:
        score += _urgency_points(task, now)
        age_days = compute_age_hours(task, now) / 24.0
        score += min(age_days * AGE_POINTS_PER_DAY, AGE_MAX_POINTS)

    score += min(task.effort_hours, MAX_EFFORT_HOURS) * EFFORT_POINTS_PER_HOUR
    score += _status_points(task.status)
    return round(score, 1)


def compute_age_hours(task: Task, now: datetime) -> float:
    """Hours elapsed since creation, never negative."""
    return max(_hours(task.created_at, now), 0.0)


def compute_cycle_hours(task: Task) -> Optional[float]:
    """Hours from start to completion, or None unless both are set."""
    if task.started_at is None or task.completed_at is None:
        return None
    return round(max(_hours(task.started_at, task.completed_at), 0.0), 2)


def annotate_task(task: Task, now: datetime) -> AnnotatedTask:
    """Attach the derived read-only fields to a task."""
    return AnnotatedTask(
        **task.model_dump(),
        risk=compute_risk(task, now),
        score=compute_score(task, now),
        age_hours=round(compute_age_hours(task, now), 2),
        cycle_hours=compute_cycle_hours(task),
    )
