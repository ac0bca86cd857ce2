# taskmanager/task/task_service.py

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from taskmanager.models.task import STATUS_VALUES, Task, TaskStatus
from taskmanager.schemas.task_schema import TaskCreate, TaskUpdate
from taskmanager.task.errors import TaskValidationError
from taskmanager.task.task_store import TaskStore


def validate_task_fields(title: Optional[str], status: Optional[str]) -> None:
    """Shared create/update predicate: non-empty title, known status."""
    if title is None or not title.strip():
        raise TaskValidationError("title is required")
    if status is not None and status not in STATUS_VALUES:
        raise TaskValidationError(
            f"status must be one of {', '.join(STATUS_VALUES)} (got {status!r})"
        )


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class TaskService:
    """Validation and default-value policy in front of a TaskStore."""

    def __init__(self, store: TaskStore):
        self.store = store

    def list_tasks(self) -> List[Task]:
        return self.store.list_all()

    def get_task(self, task_id: int) -> Task:
        return self.store.get_by_id(task_id)

    def create_task(self, data: TaskCreate) -> Task:
        status = data.status or TaskStatus.PENDING.value
        validate_task_fields(data.title, status)
        return self.store.create(self._fields(data, status))

    def update_task(self, task_id: int, data: TaskUpdate) -> Task:
        # unknown ids report 404 even when the body is also invalid
        self.store.get_by_id(task_id)
        # PUT replaces every mutable field, so status has no default here
        if not data.status:
            raise TaskValidationError("status is required")
        validate_task_fields(data.title, data.status)
        return self.store.update(task_id, self._fields(data, data.status))

    def delete_task(self, task_id: int) -> None:
        self.store.delete(task_id)

    @staticmethod
    def _fields(data: TaskCreate, status: str) -> Dict[str, Any]:
        return {
            "title": data.title,
            "description": data.description or "",
            "status": status,
            "due_date": _as_utc(data.due_date),
        }
