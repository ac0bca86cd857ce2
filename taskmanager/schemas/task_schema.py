# taskmanager/schemas/task_schema.py

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


# --------- Request bodies ----------
# Required-field and enum rules live in TaskService, so these stay permissive
# and only enforce JSON types (due_date must parse as ISO-8601).
class TaskCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    due_date: Optional[datetime] = None


# --------- For UPDATE (PUT, full replace) ----------
class TaskUpdate(TaskCreate):
    pass


# --------- For READ (responses) ----------
class TaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str = ""
    status: str
    due_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("due_date", "created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # SQLite hands back naive datetimes; everything is stored as UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class MessageResponse(BaseModel):
    message: str


class HealthRead(BaseModel):
    status: str
    message: str
