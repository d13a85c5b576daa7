"""Insights aggregation for taskboard."""

from typing import Iterable

from taskboard.models.insights import Insights
from taskboard.models.task import AnnotatedTask, RiskLevel, TaskPriority, TaskStatus


def compute_insights(tasks: Iterable[AnnotatedTask]) -> Insights:
    """Aggregate an already-filtered sequence of annotated tasks.

    Status and priority counts always contain every enum value. Risk counters
    use the derived risk, so `done` equals the number of completed tasks.
    """
    by_status = {status.value: 0 for status in TaskStatus}
    by_priority = {priority.value: 0 for priority in TaskPriority}
    risk_counts = {risk: 0 for risk in RiskLevel}

    total = 0
    age_sum = 0.0
    cycle_sum = 0.0
    cycle_count = 0
    workload = 0.0

    for task in tasks:
        total += 1
        by_status[task.status.value] += 1
        by_priority[task.priority.value] += 1
        risk_counts[task.risk] += 1

        age_sum += task.age_hours
        if task.cycle_hours is not None:
            cycle_sum += task.cycle_hours
            cycle_count += 1

        if task.status != TaskStatus.DONE:
            workload += task.effort_hours

    done = risk_counts[RiskLevel.COMPLETED]
    return Insights(
        total=total,
        by_status=by_status,
        by_priority=by_priority,
        overdue=risk_counts[RiskLevel.OVERDUE],
        at_risk=risk_counts[RiskLevel.AT_RISK],
        blocked=risk_counts[RiskLevel.BLOCKED],
        done=done,
        average_age_hours=round(age_sum / total, 2) if total else 0.0,
        average_cycle_hours=round(cycle_sum / cycle_count, 2) if cycle_count else 0.0,
        workload_hours=round(workload, 2),
        focus_index=round(done / total, 2) if total else 0.0,
    )
