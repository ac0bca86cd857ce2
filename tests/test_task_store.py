# tests/test_task_store.py

from __future__ import annotations

import pytest
from sqlalchemy import select

from taskmanager.database import make_engine, make_session_factory
from taskmanager.models.task import Deleted, Task
from taskmanager.task.errors import TaskNotFoundError, TaskStorageError
from taskmanager.task.task_store import TaskStore


def _fields(title: str, status: str = "Pending", **extra):
    return {"title": title, "description": "", "status": status, "due_date": None, **extra}


def test_create_assigns_id_and_timestamps(store: TaskStore) -> None:
    task = store.create(_fields("A"))
    assert task.id > 0
    assert task.created_at is not None
    assert task.updated_at == task.created_at
    assert task.deleted_at is None


def test_list_newest_first(store: TaskStore) -> None:
    a = store.create(_fields("A"))
    b = store.create(_fields("B"))
    c = store.create(_fields("C"))
    assert [t.id for t in store.list_all()] == [c.id, b.id, a.id]


def test_update_overwrites_mutable_fields(store: TaskStore) -> None:
    task = store.create(_fields("A", description="old"))
    updated = store.update(task.id, _fields("A2", status="Completed"))

    assert updated.id == task.id
    assert updated.title == "A2"
    assert updated.description == ""
    assert updated.status == "Completed"
    assert updated.created_at == task.created_at
    assert updated.updated_at >= task.updated_at


def test_update_missing_raises(store: TaskStore) -> None:
    with pytest.raises(TaskNotFoundError):
        store.update(999, _fields("x"))


def test_soft_delete_keeps_row(store: TaskStore, engine) -> None:
    task = store.create(_fields("A"))
    store.delete(task.id)

    with pytest.raises(TaskNotFoundError):
        store.get_by_id(task.id)
    assert store.list_all() == []
    assert store.count_live() == 0

    with make_session_factory(engine)() as db:
        row = db.scalars(select(Task).where(Task.id == task.id)).one()
        assert row.deleted_at is not None
        assert isinstance(row.lifecycle, Deleted)


def test_second_delete_reports_not_found(store: TaskStore) -> None:
    task = store.create(_fields("A"))
    store.delete(task.id)
    with pytest.raises(TaskNotFoundError):
        store.delete(task.id)


def test_update_deleted_raises(store: TaskStore) -> None:
    task = store.create(_fields("A"))
    store.delete(task.id)
    with pytest.raises(TaskNotFoundError):
        store.update(task.id, _fields("B"))


def test_ids_not_reused_after_delete(store: TaskStore) -> None:
    first = store.create(_fields("A"))
    store.delete(first.id)
    second = store.create(_fields("B"))
    assert second.id > first.id


def test_storage_failure_is_wrapped() -> None:
    # tables never created
    engine = make_engine("sqlite://")
    store = TaskStore(make_session_factory(engine))

    with pytest.raises(TaskStorageError):
        store.list_all()
    with pytest.raises(TaskStorageError):
        store.create(_fields("A"))


@pytest.mark.parametrize("task_id", [2**63, -(2**63) - 1, 10**20])
def test_out_of_range_id_is_not_found(store: TaskStore, task_id: int) -> None:
    with pytest.raises(TaskNotFoundError):
        store.get_by_id(task_id)
    with pytest.raises(TaskNotFoundError):
        store.update(task_id, _fields("x"))
    with pytest.raises(TaskNotFoundError):
        store.delete(task_id)
