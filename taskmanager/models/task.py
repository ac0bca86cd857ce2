# taskmanager/models/task.py

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Union

from sqlalchemy import Column, DateTime, Integer, String, Text
from taskmanager.database import Base


class TaskStatus(str, enum.Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In-Progress"
    COMPLETED = "Completed"


STATUS_VALUES = tuple(s.value for s in TaskStatus)

# ids are stored as signed 64-bit integers
MIN_TASK_ID = -(2**63)
MAX_TASK_ID = 2**63 - 1


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# --------- Lifecycle tag ----------
@dataclass(frozen=True)
class Live:
    pass


@dataclass(frozen=True)
class Deleted:
    at: datetime


TaskLifecycle = Union[Live, Deleted]


class Task(Base):
    __tablename__ = "tasks"
    # ids of soft-deleted rows must never be handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(String, nullable=False, default=TaskStatus.PENDING.value)

    due_date = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
    deleted_at = Column(DateTime, nullable=True, index=True)

    @property
    def lifecycle(self) -> TaskLifecycle:
        """Live or Deleted(at); TaskStore only hands out Live tasks."""
        if self.deleted_at is None:
            return Live()
        return Deleted(at=self.deleted_at)

    def __repr__(self) -> str:
        return f"<Task id={self.id} status={self.status!r} title={self.title!r}>"
