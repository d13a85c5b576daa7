"""Tests for field normalization and task creation defaults."""

from datetime import datetime, timezone

import pytest

from taskboard.errors import ValidationError
from taskboard.models.task import TaskCreate, TaskPriority, TaskStatus
from taskboard.models.task_factory import (
    create_task_base,
    normalize_effort,
    normalize_owner,
    normalize_priority,
    normalize_status,
    normalize_tags,
    normalize_title,
)


class TestNormalizers:
    def test_status(self):
        assert normalize_status("") == TaskStatus.TODO
        assert normalize_status(None) == TaskStatus.TODO
        assert normalize_status(" DONE ") == TaskStatus.DONE
        with pytest.raises(ValidationError, match="invalid status"):
            normalize_status("unknown")

    def test_priority(self):
        assert normalize_priority("") == TaskPriority.MEDIUM
        assert normalize_priority("High") == TaskPriority.HIGH
        with pytest.raises(ValidationError, match="invalid priority"):
            normalize_priority("p0")

    def test_title(self):
        assert normalize_title("  Ship it ") == "Ship it"
        with pytest.raises(ValidationError, match="title is required"):
            normalize_title("   ")
        with pytest.raises(ValidationError):
            normalize_title("x" * 201)

    def test_owner_defaults_to_unassigned(self):
        assert normalize_owner("") == "unassigned"
        assert normalize_owner(None) == "unassigned"
        assert normalize_owner(" bob ") == "bob"

    def test_effort(self):
        assert normalize_effort(None) == 1.0
        assert normalize_effort(5) == 5.0
        assert normalize_effort(0.5) == 0.5
        for bad in (0, -1, 999, float("nan"), float("inf")):
            with pytest.raises(ValidationError, match="effortHours"):
                normalize_effort(bad)

    def test_tags(self):
        assert normalize_tags([" DevOps ", "devops", "", "CI"]) == ["devops", "ci"]
        assert normalize_tags(None) == []
        with pytest.raises(ValidationError, match="too long"):
            normalize_tags(["this-tag-name-is-way-too-long"])
        with pytest.raises(ValidationError, match="too many tags"):
            normalize_tags(list("abcdefghi"))


class TestCreateTaskBase:
    def test_defaults(self, now):
        task = create_task_base(TaskCreate(title="Write docs"), now)
        assert task.id is None
        assert task.title == "Write docs"
        assert task.status == TaskStatus.TODO
        assert task.priority == TaskPriority.MEDIUM
        assert task.owner == "unassigned"
        assert task.effort_hours == 1.0
        assert task.tags == []
        assert task.created_at == now
        assert task.updated_at == now

    def test_camel_case_payload(self, now):
        payload = TaskCreate.model_validate({
            "title": "Deploy",
            "effortHours": 3,
            "dueDate": "2026-02-10T12:00:00Z",
            "tags": ["Ops"],
        })
        task = create_task_base(payload, now)
        assert task.effort_hours == 3.0
        assert task.due_date == datetime(2026, 2, 10, 12, 0, tzinfo=timezone.utc)
        assert task.tags == ["ops"]

    def test_blank_due_date_means_none(self, now):
        payload = TaskCreate.model_validate({"title": "Deploy", "dueDate": ""})
        assert create_task_base(payload, now).due_date is None

    def test_empty_title_rejected(self, now):
        with pytest.raises(ValidationError):
            create_task_base(TaskCreate(title=""), now)

    def test_non_finite_effort_rejected(self, now):
        payload = TaskCreate.model_validate({"title": "Deploy", "effortHours": float("nan")})
        with pytest.raises(ValidationError, match="effortHours"):
            create_task_base(payload, now)
