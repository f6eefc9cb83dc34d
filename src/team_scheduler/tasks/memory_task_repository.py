from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Dict, Optional, Sequence

from ..core.enums import TaskStatus
from .model import Task
from .repository import TaskRepository


class InMemoryTaskRepository(TaskRepository):
    def __init__(self, tasks: Sequence[Task] = ()):
        # dict keeps insertion order, standing in for created_at
        self._tasks: Dict[str, Task] = {t.task_id: t for t in tasks}

    def list_tasks(
        self,
        *,
        user_id: Optional[int] = None,
        project_id: Optional[str] = None,
        status: Optional[TaskStatus] = None,
    ) -> Sequence[Task]:
        out = [
            t
            for t in self._tasks.values()
            if (user_id is None or t.user_id == int(user_id))
            and (project_id is None or t.project_id == project_id)
            and (status is None or t.status == status)
        ]
        return sorted(out, key=lambda t: (t.due_date is None, t.due_date or date.min))

    def get_by_id(self, task_id: str) -> Optional[Task]:
        return self._tasks.get(task_id)

    def insert(self, task: Task) -> None:
        self._tasks[task.task_id] = task

    def update(self, task: Task) -> bool:
        if task.task_id not in self._tasks:
            return False
        self._tasks[task.task_id] = task
        return True

    def delete(self, task_id: str) -> bool:
        return self._tasks.pop(task_id, None) is not None

    def detach_project(self, project_id: str) -> int:
        touched = 0
        for task_id, task in list(self._tasks.items()):
            if task.project_id == project_id:
                self._tasks[task_id] = replace(task, project_id=None)
                touched += 1
        return touched
