from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Any, Dict, List, Optional

from ..common.permissions import require_admin
from ..common.validators import matches_search, optional_text, require_non_empty
from ..core.enums import TaskStatus
from ..core.exceptions import NotFoundError
from ..logging_config import get_logger
from ..tasks.repository import TaskRepository
from ..users.model import User
from ..users.repository import UserRepository
from .model import Project, ProjectProgress
from .repository import ProjectRepository

logger = get_logger(__name__)


class ProjectService:
    """Use case: projects, their members and task progress."""

    def __init__(self, projects: ProjectRepository, tasks: TaskRepository, users: UserRepository):
        self._projects = projects
        self._tasks = tasks
        self._users = users

    def list_projects(self, *, search: Optional[str] = None) -> List[Project]:
        return [p for p in self._projects.list_all() if matches_search(search, p.name, p.tag, p.detail)]

    def get_project(self, project_id: str) -> Project:
        project = self._projects.get_by_id(project_id)
        if not project:
            raise NotFoundError("Project not found")
        return project

    def create_project(self, *, name: str, tag: Optional[str] = None, detail: Optional[str] = None) -> Project:
        project = Project(
            project_id=str(uuid.uuid4()),
            name=require_non_empty(name, "Project name"),
            tag=optional_text(tag),
            detail=optional_text(detail),
        )
        self._projects.insert(project)
        return project

    def update_project(self, *, project_id: str, changes: Dict[str, Any]) -> Project:
        current = self.get_project(project_id)
        project = replace(
            current,
            name=require_non_empty(changes.get("name", current.name), "Project name"),
            tag=optional_text(changes.get("tag", current.tag)),
            detail=optional_text(changes.get("detail", current.detail)),
        )
        self._projects.update(project)
        return project

    def delete_project(self, *, actor: User, project_id: str) -> None:
        require_admin(actor)
        self.get_project(project_id)
        # project row first; MySQL's ON DELETE SET NULL already detaches, memory needs the explicit call
        self._projects.delete(project_id)
        detached = self._tasks.detach_project(project_id)
        logger.info("Project deleted", project_id=project_id, detached_tasks=detached)

    def add_member(self, *, project_id: str, user_id: int) -> None:
        self.get_project(project_id)
        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")
        self._projects.add_member(project_id=project_id, user_id=int(user_id))

    def remove_member(self, *, project_id: str, user_id: int) -> None:
        self.get_project(project_id)
        if not self._projects.remove_member(project_id=project_id, user_id=int(user_id)):
            raise NotFoundError("User is not a member of this project")

    def list_members(self, project_id: str) -> List[User]:
        self.get_project(project_id)
        members = []
        for user_id in self._projects.list_member_ids(project_id):
            user = self._users.get_by_id(user_id)
            if user:
                members.append(user)
        return members

    def list_user_projects(self, user_id: int) -> List[Project]:
        projects = []
        for project_id in self._projects.list_project_ids_for_user(user_id):
            project = self._projects.get_by_id(project_id)
            if project:
                projects.append(project)
        return sorted(projects, key=lambda p: p.name)

    def progress(self, project_id: str) -> ProjectProgress:
        self.get_project(project_id)
        tasks = self._tasks.list_tasks(project_id=project_id)
        done = sum(1 for t in tasks if t.status == TaskStatus.DONE)
        return ProjectProgress(done=done, total=len(tasks))
