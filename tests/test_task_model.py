# tests/test_task_model.py

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from taskmanager.models.task import Deleted, Live, Task, TaskStatus
from taskmanager.task.errors import TaskValidationError
from taskmanager.task.task_service import validate_task_fields


def test_status_values() -> None:
    assert [s.value for s in TaskStatus] == ["Pending", "In-Progress", "Completed"]


def test_lifecycle_tag() -> None:
    task = Task(title="t", status="Pending")
    assert task.lifecycle == Live()

    at = datetime(2024, 5, 1, tzinfo=timezone.utc)
    task.deleted_at = at
    assert task.lifecycle == Deleted(at=at)


@pytest.mark.parametrize("title", [None, "", "   "])
def test_predicate_rejects_blank_title(title) -> None:
    with pytest.raises(TaskValidationError):
        validate_task_fields(title, "Pending")


@pytest.mark.parametrize("status", ["Done", "pending", "In Progress", "todo"])
def test_predicate_rejects_unknown_status(status: str) -> None:
    with pytest.raises(TaskValidationError):
        validate_task_fields("Write spec", status)


@pytest.mark.parametrize("status", [None, "Pending", "In-Progress", "Completed"])
def test_predicate_accepts(status) -> None:
    validate_task_fields("Write spec", status)
