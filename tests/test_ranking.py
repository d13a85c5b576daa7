"""Tests for task list sorting."""

from datetime import timedelta

import pytest

from taskboard.engine.ranking import normalize_sort, sort_tasks
from taskboard.engine.scoring import annotate_task
from taskboard.models.task import SortField, SortOrder, Task, TaskPriority


@pytest.fixture
def make_annotated(sample_task_base, now):
    def _make(task_id, **overrides):
        return annotate_task(Task(**{**sample_task_base, "id": task_id, **overrides}), now)
    return _make


def _ids(tasks):
    return [task.id for task in tasks]


class TestNormalizeSort:
    def test_defaults(self):
        assert normalize_sort(None, None) == (SortField.SCORE, SortOrder.DESC)
        assert normalize_sort("", "") == (SortField.SCORE, SortOrder.DESC)

    def test_valid_values_are_case_insensitive(self):
        assert normalize_sort(" Title ", "ASC") == (SortField.TITLE, SortOrder.ASC)
        assert normalize_sort("due_date", "desc") == (SortField.DUE_DATE, SortOrder.DESC)

    def test_unknown_values_fall_back(self):
        assert normalize_sort("unknown", "maybe") == (SortField.SCORE, SortOrder.DESC)


class TestSortTasks:
    """Test sort_tasks ordering and tie-breaking."""

    def test_score_desc_by_default(self, make_annotated):
        low = make_annotated(1, priority=TaskPriority.LOW)
        critical = make_annotated(2, priority=TaskPriority.CRITICAL)
        medium = make_annotated(3, priority=TaskPriority.MEDIUM)
        assert _ids(sort_tasks([low, critical, medium])) == [2, 3, 1]

    def test_ties_broken_by_id_ascending_in_both_orders(self, make_annotated):
        tasks = [make_annotated(task_id) for task_id in (3, 1, 2)]
        assert _ids(sort_tasks(tasks, SortField.SCORE, SortOrder.DESC)) == [1, 2, 3]
        assert _ids(sort_tasks(tasks, SortField.SCORE, SortOrder.ASC)) == [1, 2, 3]

    def test_priority_sort(self, make_annotated):
        tasks = [
            make_annotated(1, priority=TaskPriority.HIGH),
            make_annotated(2, priority=TaskPriority.LOW),
            make_annotated(3, priority=TaskPriority.HIGH),
        ]
        assert _ids(sort_tasks(tasks, SortField.PRIORITY, SortOrder.DESC)) == [1, 3, 2]
        assert _ids(sort_tasks(tasks, SortField.PRIORITY, SortOrder.ASC)) == [2, 1, 3]

    def test_due_date_sort_puts_undated_last(self, make_annotated, now):
        tasks = [
            make_annotated(1, due_date=None),
            make_annotated(2, due_date=now + timedelta(days=3)),
            make_annotated(3, due_date=now + timedelta(days=1)),
            make_annotated(4, due_date=None),
        ]
        assert _ids(sort_tasks(tasks, SortField.DUE_DATE, SortOrder.ASC)) == [3, 2, 1, 4]
        assert _ids(sort_tasks(tasks, SortField.DUE_DATE, SortOrder.DESC)) == [2, 3, 1, 4]

    def test_title_sort_is_case_insensitive(self, make_annotated):
        tasks = [
            make_annotated(1, title="beta"),
            make_annotated(2, title="Alpha"),
            make_annotated(3, title="gamma"),
        ]
        assert _ids(sort_tasks(tasks, SortField.TITLE, SortOrder.ASC)) == [2, 1, 3]

    def test_timestamp_sorts(self, make_annotated, now):
        tasks = [
            make_annotated(1, created_at=now - timedelta(hours=1), updated_at=now - timedelta(hours=5)),
            make_annotated(2, created_at=now - timedelta(hours=3), updated_at=now - timedelta(hours=2)),
        ]
        assert _ids(sort_tasks(tasks, SortField.CREATED_AT, SortOrder.ASC)) == [2, 1]
        assert _ids(sort_tasks(tasks, SortField.UPDATED_AT, SortOrder.DESC)) == [2, 1]

    def test_input_list_is_not_modified(self, make_annotated):
        tasks = [make_annotated(2), make_annotated(1)]
        sort_tasks(tasks, SortField.TITLE, SortOrder.ASC)
        assert _ids(tasks) == [2, 1]
