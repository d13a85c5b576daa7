"""Task creation factory for taskboard.

This module centralizes field normalization and task creation so that the
create and update paths apply the same rules and the same defaults.
"""

import math
from datetime import datetime
from typing import Iterable, List, Optional

from taskboard.errors import ValidationError
from taskboard.models.task import Task, TaskCreate, TaskPriority, TaskStatus, as_utc
from taskboard.models.constants import (
    DEFAULT_EFFORT_HOURS,
    DEFAULT_OWNER,
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    MAX_EFFORT_HOURS,
    MAX_OWNER_LENGTH,
    MAX_TAG_LENGTH,
    MAX_TAGS,
    MAX_TITLE_LENGTH,
)


def normalize_status(value: Optional[str]) -> TaskStatus:
    """Parse a status name (case-insensitive); empty means the default."""
    raw = (value or "").strip().lower()
    if not raw:
        return DEFAULT_STATUS
    try:
        return TaskStatus(raw)
    except ValueError:
        raise ValidationError(f"invalid status: {raw}") from None


def normalize_priority(value: Optional[str]) -> TaskPriority:
    """Parse a priority name (case-insensitive); empty means the default."""
    raw = (value or "").strip().lower()
    if not raw:
        return DEFAULT_PRIORITY
    try:
        return TaskPriority(raw)
    except ValueError:
        raise ValidationError(f"invalid priority: {raw}") from None


def normalize_title(value: Optional[str]) -> str:
    title = (value or "").strip()
    if not title:
        raise ValidationError("title is required")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(f"title must be at most {MAX_TITLE_LENGTH} characters")
    return title


def normalize_owner(value: Optional[str]) -> str:
    owner = (value or "").strip()
    if not owner:
        return DEFAULT_OWNER
    if len(owner) > MAX_OWNER_LENGTH:
        raise ValidationError(f"owner must be at most {MAX_OWNER_LENGTH} characters")
    return owner


def normalize_effort(value: Optional[float]) -> float:
    """Validate effort hours; None means the default."""
    if value is None:
        return DEFAULT_EFFORT_HOURS
    if not math.isfinite(value) or value <= 0 or value > MAX_EFFORT_HOURS:
        raise ValidationError(f"effortHours must be greater than 0 and at most {MAX_EFFORT_HOURS:g}")
    return float(value)


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Trim, lower-case and deduplicate tags while preserving order."""
    if not tags:
        return []
    seen = set()
    result: List[str] = []
    for tag in tags:
        value = (tag or "").strip().lower()
        if not value:
            continue
        if len(value) > MAX_TAG_LENGTH:
            raise ValidationError(f"tag is too long: {value}")
        if value not in seen:
            seen.add(value)
            result.append(value)
    if len(result) > MAX_TAGS:
        raise ValidationError(f"too many tags: {len(result)} (max {MAX_TAGS})")
    return result


def create_task_base(payload: TaskCreate, now: datetime) -> Task:
    """Build an unsaved task from a create payload.

    The status is left at its default; the caller applies the requested
    status through the transition rules so that `startedAt`/`completedAt`
    are stamped consistently.

    Raises:
        ValidationError: If any field fails normalization
    """
    return Task(
        title=normalize_title(payload.title),
        description=(payload.description or "").strip(),
        status=DEFAULT_STATUS,
        priority=normalize_priority(payload.priority),
        owner=normalize_owner(payload.owner),
        effort_hours=normalize_effort(payload.effort_hours),
        tags=normalize_tags(payload.tags),
        due_date=as_utc(payload.due_date),
        created_at=now,
        updated_at=now,
    )
