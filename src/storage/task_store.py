from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, List, Literal, Optional, Union

from care_assistant.models import CAREGIVER_MARKER, Category, Priority, Task, TaskUpdate

logger = logging.getLogger(__name__)

TaskView = Literal["all", "high", "pending", "completed"]


class TaskStore:
    """In-memory ordered task store keyed by task id.

    Stands in for a persistence layer: every operation is a coroutine so a
    database-backed store can replace it without touching callers. Updates
    are last-write-wins.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: Dict[str, Task] = {}
        self._lock = asyncio.Lock()
        for task in tasks or []:
            self._tasks[task.id] = task

    async def append(self, tasks: Iterable[Task]) -> None:
        async with self._lock:
            for task in tasks:
                if task.id in self._tasks:
                    raise ValueError(f"duplicate task id: {task.id}")
                self._tasks[task.id] = task

    async def list(self) -> List[Task]:
        return list(self._tasks.values())

    async def get(self, task_id: str) -> Optional[Task]:
        return self._tasks.get(task_id)

    async def update(self, task_id: str, fields: Union[TaskUpdate, dict]) -> Optional[Task]:
        """Apply a partial update. Unknown ids are ignored and return None."""
        update = fields if isinstance(fields, TaskUpdate) else TaskUpdate.model_validate(fields)
        # only time_context may be cleared; None elsewhere means "leave as is"
        changes = {
            k: v for k, v in update.model_dump(exclude_unset=True).items()
            if v is not None or k == "time_context"
        }

        async with self._lock:
            current = self._tasks.get(task_id)
            if current is None:
                logger.info("Update for unknown task %s ignored", task_id)
                return None
            updated = current.model_copy(update=changes)
            self._tasks[task_id] = updated
            return updated

    async def delete(self, task_id: str) -> bool:
        async with self._lock:
            return self._tasks.pop(task_id, None) is not None

    async def add_manual(
        self,
        text: str,
        priority: Priority = "medium",
        category: Category = "other",
        time_context: Optional[str] = None,
    ) -> Task:
        """Add a caregiver-authored task that did not come from extraction."""
        task = Task(
            text=text,
            priority=priority,
            category=category,
            time_context=time_context,
            completed=False,
            extracted_from=CAREGIVER_MARKER,
        )
        await self.append([task])
        return task

    async def filter(self, view: TaskView = "all") -> List[Task]:
        tasks = await self.list()
        if view == "high":
            return [t for t in tasks if t.priority == "high"]
        if view == "pending":
            return [t for t in tasks if not t.completed]
        if view == "completed":
            return [t for t in tasks if t.completed]
        return tasks

    async def stats(self) -> Dict[str, int]:
        tasks = await self.list()
        return {
            "total": len(tasks),
            "completed": sum(1 for t in tasks if t.completed),
            "high_priority": sum(1 for t in tasks if t.priority == "high" and not t.completed),
            "pending": sum(1 for t in tasks if not t.completed),
        }

    def __len__(self) -> int:
        return len(self._tasks)
