# taskmanager/task/task_store.py

from __future__ import annotations

import logging
from typing import Any, Dict, List

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from taskmanager.models.task import MAX_TASK_ID, MIN_TASK_ID, Live, Task, utcnow
from taskmanager.task.errors import TaskNotFoundError, TaskStorageError

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = ("title", "description", "status", "due_date")


class TaskStore:
    """
    SQLAlchemy-backed task persistence.

    - every read filters out soft-deleted rows
    - each call opens its own session, so one store is shared by all requests
    - validation is the caller's job; the store persists what it is given
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    # ---- low-level helpers ----

    @staticmethod
    def _live():
        return select(Task).where(Task.deleted_at.is_(None))

    def _get_live(self, db: Session, task_id: int) -> Task:
        # ids outside INTEGER range cannot be bound by the driver (OverflowError)
        if not MIN_TASK_ID <= task_id <= MAX_TASK_ID:
            raise TaskNotFoundError(task_id)
        task = db.scalars(self._live().where(Task.id == task_id)).first()
        if task is None or not isinstance(task.lifecycle, Live):
            raise TaskNotFoundError(task_id)
        return task

    @staticmethod
    def _fail(db: Session, op: str, **extra: Any) -> TaskStorageError:
        db.rollback()
        logger.exception("task_storage_error", extra={"op": op, **extra})
        return TaskStorageError(f"Failed to {op} task")

    # ---- operations ----

    def list_all(self) -> List[Task]:
        with self._session_factory() as db:
            try:
                stmt = self._live().order_by(Task.created_at.desc(), Task.id.desc())
                return list(db.scalars(stmt).all())
            except SQLAlchemyError as exc:
                raise self._fail(db, "fetch") from exc

    def get_by_id(self, task_id: int) -> Task:
        with self._session_factory() as db:
            try:
                return self._get_live(db, task_id)
            except SQLAlchemyError as exc:
                raise self._fail(db, "fetch", task_id=task_id) from exc

    def create(self, fields: Dict[str, Any]) -> Task:
        now = utcnow()
        task = Task(
            **{name: fields.get(name) for name in MUTABLE_FIELDS},
            created_at=now,
            updated_at=now,
        )
        with self._session_factory() as db:
            try:
                db.add(task)
                db.commit()
                db.refresh(task)
            except SQLAlchemyError as exc:
                raise self._fail(db, "create") from exc

        logger.info("task_created", extra={"task_id": task.id, "status": task.status})
        return task

    def update(self, task_id: int, fields: Dict[str, Any]) -> Task:
        with self._session_factory() as db:
            try:
                task = self._get_live(db, task_id)
                for name in MUTABLE_FIELDS:
                    setattr(task, name, fields.get(name))
                task.updated_at = utcnow()
                db.commit()
                db.refresh(task)
            except SQLAlchemyError as exc:
                raise self._fail(db, "update", task_id=task_id) from exc

        logger.info("task_updated", extra={"task_id": task.id, "status": task.status})
        return task

    def delete(self, task_id: int) -> None:
        with self._session_factory() as db:
            try:
                task = self._get_live(db, task_id)
                now = utcnow()
                task.deleted_at = now
                task.updated_at = now
                db.commit()
            except SQLAlchemyError as exc:
                raise self._fail(db, "delete", task_id=task_id) from exc

        logger.info("task_deleted", extra={"task_id": task_id})

    def count_live(self) -> int:
        with self._session_factory() as db:
            try:
                stmt = select(func.count(Task.id)).where(Task.deleted_at.is_(None))
                return int(db.scalar(stmt) or 0)
            except SQLAlchemyError as exc:
                raise self._fail(db, "count") from exc
