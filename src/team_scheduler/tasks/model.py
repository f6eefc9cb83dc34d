from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import TaskStatus


@dataclass(frozen=True)
class Task:
    task_id: str
    user_id: int
    title: str
    status: TaskStatus = TaskStatus.OPEN
    project_id: Optional[str] = None
    tag: Optional[str] = None
    due_date: Optional[date] = None
    detail: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.task_id,
            "user_id": self.user_id,
            "title": self.title,
            "status": self.status.value,
            "project_id": self.project_id,
            "tag": self.tag,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "detail": self.detail,
        }
