from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Project
from .repository import ProjectRepository


def _row_to_project(row: dict) -> Project:
    return Project(
        project_id=row["project_id"],
        name=row["name"],
        tag=row.get("tag"),
        detail=row.get("detail"),
    )


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT project_id, name, tag, detail FROM projects ORDER BY name ASC")
            return [_row_to_project(r) for r in fetchall(cur)]

    def get_by_id(self, project_id: str) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT project_id, name, tag, detail FROM projects WHERE project_id=%s", (project_id,))
            row = fetchone(cur)
            return _row_to_project(row) if row else None

    def insert(self, project: Project) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO projects(project_id, name, tag, detail) VALUES(%s,%s,%s,%s)",
                (project.project_id, project.name, project.tag, project.detail),
            )

    def update(self, project: Project) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE projects SET name=%s, tag=%s, detail=%s, updated_at=CURRENT_TIMESTAMP
                WHERE project_id=%s
                """,
                (project.name, project.tag, project.detail, project.project_id),
            )
            return cur.rowcount > 0

    def delete(self, project_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM project_members WHERE project_id=%s", (project_id,))
            cur.execute("DELETE FROM projects WHERE project_id=%s", (project_id,))
            return cur.rowcount > 0

    def add_member(self, *, project_id: str, user_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO project_members(project_id, user_id) VALUES(%s,%s)",
                (project_id, int(user_id)),
            )

    def remove_member(self, *, project_id: str, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM project_members WHERE project_id=%s AND user_id=%s",
                (project_id, int(user_id)),
            )
            return cur.rowcount > 0

    def list_member_ids(self, project_id: str) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id FROM project_members WHERE project_id=%s ORDER BY user_id ASC",
                (project_id,),
            )
            return [int(r["user_id"]) for r in fetchall(cur)]

    def list_project_ids_for_user(self, user_id: int) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT project_id FROM project_members WHERE user_id=%s", (int(user_id),))
            return [r["project_id"] for r in fetchall(cur)]
