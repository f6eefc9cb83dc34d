from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import WorkType


@dataclass(frozen=True)
class Event:
    event_id: str
    user_id: int
    title: str
    start_time: datetime
    end_time: datetime
    work_type: WorkType
    description: Optional[str] = None

    def duplicate_key(self) -> tuple:
        return (self.user_id, self.start_time, self.end_time, self.work_type)

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "work_type": self.work_type.value,
        }
