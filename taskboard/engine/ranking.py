"""Sorting logic for taskboard task lists.

Orders annotated tasks by the requested key and direction. Ties are always
broken by id ascending, and tasks without a due date go after dated tasks
when sorting by due date, whatever the direction. This produces a
deterministic ordering.
"""

from typing import Callable, Dict, List, Optional, Tuple

from taskboard.models.task import AnnotatedTask, SortField, SortOrder
from taskboard.models.constants import PRIORITY_WEIGHTS


def normalize_sort(sort_by: Optional[str], order: Optional[str]) -> Tuple[SortField, SortOrder]:
    """Parse sort parameters, falling back to score/desc for unknown values."""
    try:
        field = SortField((sort_by or "").strip().lower())
    except ValueError:
        field = SortField.SCORE
    try:
        direction = SortOrder((order or "").strip().lower())
    except ValueError:
        direction = SortOrder.DESC
    return field, direction


_SORT_KEYS: Dict[SortField, Callable[[AnnotatedTask], object]] = {
    SortField.SCORE: lambda task: task.score,
    SortField.PRIORITY: lambda task: PRIORITY_WEIGHTS[task.priority],
    SortField.DUE_DATE: lambda task: task.due_date,
    SortField.UPDATED_AT: lambda task: task.updated_at,
    SortField.CREATED_AT: lambda task: task.created_at,
    SortField.TITLE: lambda task: task.title.casefold(),
}


def sort_tasks(
    tasks: List[AnnotatedTask],
    sort_by: SortField = SortField.SCORE,
    order: SortOrder = SortOrder.DESC,
) -> List[AnnotatedTask]:
    """Return the tasks sorted by `sort_by`/`order`.

    Args:
        tasks: Annotated tasks to sort
        sort_by: Sort key
        order: Sort direction

    Returns:
        New list; the input is not modified
    """
    # Python's sort is stable even with reverse=True, so pre-sorting by id
    # leaves equal keys in ascending id order.
    by_id = sorted(tasks, key=lambda task: task.id or 0)
    reverse = order == SortOrder.DESC
    key = _SORT_KEYS[sort_by]

    if sort_by == SortField.DUE_DATE:
        dated = [task for task in by_id if task.due_date is not None]
        undated = [task for task in by_id if task.due_date is None]
        return sorted(dated, key=key, reverse=reverse) + undated

    return sorted(by_id, key=key, reverse=reverse)
