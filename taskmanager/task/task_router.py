# taskmanager/task/task_router.py

import logging
import re

from fastapi import APIRouter, Depends, HTTPException, Request

from taskmanager.models.task import MAX_TASK_ID, MIN_TASK_ID
from taskmanager.schemas.task_schema import MessageResponse, TaskCreate, TaskRead, TaskUpdate
from taskmanager.task.errors import TaskNotFoundError, TaskStorageError, TaskValidationError
from taskmanager.task.task_service import TaskService

logger = logging.getLogger(__name__)

TASK_ID_RE = re.compile(r"[+-]?[0-9]+")


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def _parse_task_id(raw: str) -> int:
    # ASCII digits only; int() alone also takes "1_0", " 1" and non-ASCII digits
    if not TASK_ID_RE.fullmatch(raw):
        raise HTTPException(status_code=400, detail="Invalid task ID")
    task_id = int(raw)
    if not MIN_TASK_ID <= task_id <= MAX_TASK_ID:
        raise HTTPException(status_code=400, detail="Invalid task ID")
    return task_id


# ==========================
#  ROUTER
# ==========================
router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
)


@router.get("", response_model=list[TaskRead])
def get_all_tasks(service: TaskService = Depends(get_task_service)):
    try:
        return service.list_tasks()
    except TaskStorageError:
        raise HTTPException(status_code=500, detail="Failed to fetch tasks")


@router.get("/{task_id}", response_model=TaskRead)
def get_task(task_id: str, service: TaskService = Depends(get_task_service)):
    tid = _parse_task_id(task_id)
    try:
        return service.get_task(tid)
    except TaskNotFoundError:
        raise HTTPException(404, "Task not found")
    except TaskStorageError:
        raise HTTPException(status_code=500, detail="Failed to fetch task")


@router.post("", response_model=TaskRead, status_code=201)
def create_task(data: TaskCreate, service: TaskService = Depends(get_task_service)):
    try:
        return service.create_task(data)
    except TaskValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except TaskStorageError:
        raise HTTPException(status_code=500, detail="Failed to create task")


@router.put("/{task_id}", response_model=TaskRead)
def update_task(task_id: str, data: TaskUpdate, service: TaskService = Depends(get_task_service)):
    tid = _parse_task_id(task_id)
    try:
        return service.update_task(tid, data)
    except TaskNotFoundError:
        raise HTTPException(404, "Task not found")
    except TaskValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except TaskStorageError:
        raise HTTPException(status_code=500, detail="Failed to update task")


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    tid = _parse_task_id(task_id)
    try:
        service.delete_task(tid)
    except TaskNotFoundError:
        raise HTTPException(404, "Task not found")
    except TaskStorageError:
        raise HTTPException(status_code=500, detail="Failed to delete task")

    return {"message": "Task deleted successfully"}
