import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from api.dependencies import get_task_store
from api.metrics import REQUESTS_TOTAL, TASKS_STORED
from care_assistant.models import Category, Priority, TaskUpdate
from scheduling.calendar_view import tasks_for_date
from storage.task_store import TaskStore, TaskView

router = APIRouter()
logger = logging.getLogger(__name__)


class CreateTaskIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., min_length=1)
    priority: Priority = "medium"
    category: Category = "other"
    time_context: Optional[str] = Field(default=None, alias="timeContext")


@router.get("/tasks")
async def get_tasks(view: TaskView = "all", store: TaskStore = Depends(get_task_store)) -> dict:
    tasks = await store.filter(view)
    return {
        "tasks": [t.to_json() for t in tasks],
        "total": len(tasks),
    }


@router.get("/tasks/stats")
async def get_task_stats(store: TaskStore = Depends(get_task_store)) -> dict:
    return await store.stats()


@router.get("/tasks/calendar")
async def get_calendar_day(
    date: Optional[str] = None,
    store: TaskStore = Depends(get_task_store),
) -> dict:
    """Tasks whose time context places them on the given day (YYYY-MM-DD, default today)."""
    today = datetime.now().date()
    try:
        day = datetime.strptime(date, "%Y-%m-%d").date() if date else today
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")

    tasks = tasks_for_date(await store.list(), day, today=today)
    return {
        "date": day.isoformat(),
        "tasks": [t.to_json() for t in tasks],
    }


@router.post("/tasks")
async def create_task(payload: CreateTaskIn, store: TaskStore = Depends(get_task_store)) -> dict:
    """Caregiver adds a task by hand."""
    try:
        task = await store.add_manual(
            payload.text,
            priority=payload.priority,
            category=payload.category,
            time_context=payload.time_context,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    TASKS_STORED.set(len(store))
    REQUESTS_TOTAL.labels(endpoint="/tasks", status="created").inc()
    logger.info(f"Caregiver added task {task.id}")
    return task.to_json()


@router.patch("/tasks/{task_id}")
async def update_task(task_id: str, payload: TaskUpdate, store: TaskStore = Depends(get_task_store)) -> dict:
    task = await store.update(task_id, payload)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task.to_json()


@router.delete("/tasks/{task_id}")
async def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> dict:
    if not await store.delete(task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    TASKS_STORED.set(len(store))
    return {"status": "deleted", "id": task_id}
