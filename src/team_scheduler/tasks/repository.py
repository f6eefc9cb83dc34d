from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import TaskStatus
from .model import Task


class TaskRepository(Protocol):
    def list_tasks(
        self,
        *,
        user_id: Optional[int] = None,
        project_id: Optional[str] = None,
        status: Optional[TaskStatus] = None,
    ) -> Sequence[Task]:
        raise NotImplementedError

    def get_by_id(self, task_id: str) -> Optional[Task]:
        raise NotImplementedError

    def insert(self, task: Task) -> None:
        raise NotImplementedError

    def update(self, task: Task) -> bool:
        raise NotImplementedError

    def delete(self, task_id: str) -> bool:
        raise NotImplementedError

    def detach_project(self, project_id: str) -> int:
        """Clear project_id on every task of the project; returns the number of tasks touched."""
        raise NotImplementedError
