from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import parse_optional_date
from ..common.permissions import require_owner_or_admin
from ..common.validators import matches_search, optional_text, require_enum, require_non_empty
from ..core.enums import TaskStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..projects.repository import ProjectRepository
from .model import Task
from .repository import TaskRepository

_UPDATABLE_FIELDS = ("title", "status", "project_id", "tag", "due_date", "detail")


class TaskService:
    def __init__(self, tasks: TaskRepository, projects: ProjectRepository):
        self._tasks = tasks
        self._projects = projects

    def _validated(self, task: Task) -> Task:
        project_id = optional_text(task.project_id)
        if project_id and not self._projects.get_by_id(project_id):
            raise ValidationError("Project does not exist")

        due_date = task.due_date
        if due_date is not None and not isinstance(due_date, date):
            due_date = parse_optional_date(due_date)

        return replace(
            task,
            title=require_non_empty(task.title, "Title"),
            status=require_enum(task.status or TaskStatus.OPEN, TaskStatus, "status"),
            project_id=project_id,
            tag=optional_text(task.tag),
            due_date=due_date,
            detail=optional_text(task.detail),
        )

    def list_tasks(
        self,
        *,
        user_id: Optional[int] = None,
        project_id: Optional[str] = None,
        status: Optional[TaskStatus] = None,
        search: Optional[str] = None,
    ) -> List[Task]:
        tasks = self._tasks.list_tasks(user_id=user_id, project_id=project_id, status=status)
        return [t for t in tasks if matches_search(search, t.title, t.tag, t.detail)]

    def get_task(self, task_id: str) -> Task:
        task = self._tasks.get_by_id(task_id)
        if not task:
            raise NotFoundError("Task not found")
        return task

    def create_task(
        self,
        *,
        user_id: int,
        title: str,
        project_id: Optional[str] = None,
        tag: Optional[str] = None,
        due_date: Optional[date | str] = None,
        detail: Optional[str] = None,
        status: Optional[TaskStatus | str] = None,
    ) -> Task:
        task = self._validated(
            Task(
                task_id=str(uuid.uuid4()),
                user_id=int(user_id),
                title=title,
                status=status or TaskStatus.OPEN,
                project_id=project_id,
                tag=tag,
                due_date=due_date,
                detail=detail,
            )
        )
        self._tasks.insert(task)
        return task

    def update_task(self, *, actor, task_id: str, changes: Dict[str, Any]) -> Task:
        current = self.get_task(task_id)
        require_owner_or_admin(actor, current.user_id)

        updates = {k: v for k, v in changes.items() if k in _UPDATABLE_FIELDS}
        task = self._validated(replace(current, **updates))
        self._tasks.update(task)
        return task

    def set_status(self, *, actor, task_id: str, status: TaskStatus | str) -> Task:
        status = require_enum(status, TaskStatus, "status")
        return self.update_task(actor=actor, task_id=task_id, changes={"status": status})

    def delete_task(self, *, actor, task_id: str) -> None:
        current = self.get_task(task_id)
        require_owner_or_admin(actor, current.user_id)
        self._tasks.delete(task_id)
