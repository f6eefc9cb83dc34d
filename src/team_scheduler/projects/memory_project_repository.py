from __future__ import annotations

from typing import Dict, Optional, Sequence, Set, Tuple

from .model import Project
from .repository import ProjectRepository


class InMemoryProjectRepository(ProjectRepository):
    def __init__(self, projects: Sequence[Project] = ()):
        self._projects: Dict[str, Project] = {p.project_id: p for p in projects}
        self._members: Set[Tuple[str, int]] = set()

    def list_all(self) -> Sequence[Project]:
        return sorted(self._projects.values(), key=lambda p: p.name)

    def get_by_id(self, project_id: str) -> Optional[Project]:
        return self._projects.get(project_id)

    def insert(self, project: Project) -> None:
        self._projects[project.project_id] = project

    def update(self, project: Project) -> bool:
        if project.project_id not in self._projects:
            return False
        self._projects[project.project_id] = project
        return True

    def delete(self, project_id: str) -> bool:
        self._members = {m for m in self._members if m[0] != project_id}
        return self._projects.pop(project_id, None) is not None

    def add_member(self, *, project_id: str, user_id: int) -> None:
        self._members.add((project_id, int(user_id)))

    def remove_member(self, *, project_id: str, user_id: int) -> bool:
        key = (project_id, int(user_id))
        if key not in self._members:
            return False
        self._members.remove(key)
        return True

    def list_member_ids(self, project_id: str) -> Sequence[int]:
        return sorted(uid for pid, uid in self._members if pid == project_id)

    def list_project_ids_for_user(self, user_id: int) -> Sequence[str]:
        return [pid for pid, uid in self._members if uid == int(user_id)]
