from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Project


class ProjectRepository(Protocol):
    """Projects plus the project/user membership link table."""

    def list_all(self) -> Sequence[Project]:
        raise NotImplementedError

    def get_by_id(self, project_id: str) -> Optional[Project]:
        raise NotImplementedError

    def insert(self, project: Project) -> None:
        raise NotImplementedError

    def update(self, project: Project) -> bool:
        raise NotImplementedError

    def delete(self, project_id: str) -> bool:
        """Delete the project together with its memberships."""
        raise NotImplementedError

    def add_member(self, *, project_id: str, user_id: int) -> None:
        raise NotImplementedError

    def remove_member(self, *, project_id: str, user_id: int) -> bool:
        raise NotImplementedError

    def list_member_ids(self, project_id: str) -> Sequence[int]:
        raise NotImplementedError

    def list_project_ids_for_user(self, user_id: int) -> Sequence[str]:
        raise NotImplementedError
