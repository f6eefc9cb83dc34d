from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Project:
    project_id: str
    name: str
    tag: Optional[str] = None
    detail: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.project_id,
            "name": self.name,
            "tag": self.tag,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class ProjectProgress:
    done: int
    total: int

    @property
    def percent(self) -> int:
        return round(self.done * 100 / self.total) if self.total else 0

    def to_dict(self) -> dict:
        return {"done": self.done, "total": self.total, "percent": self.percent}
