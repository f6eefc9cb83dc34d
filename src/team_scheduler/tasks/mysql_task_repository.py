from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import Task
from .repository import TaskRepository

_COLUMNS = "task_id, user_id, title, status, project_id, tag, due_date, detail"


def _row_to_task(row: dict) -> Task:
    return Task(
        task_id=row["task_id"],
        user_id=int(row["user_id"]),
        title=row["title"],
        status=TaskStatus(row["status"]),
        project_id=row.get("project_id"),
        tag=row.get("tag"),
        due_date=normalize_mysql_date(row.get("due_date")),
        detail=row.get("detail"),
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_tasks(
        self,
        *,
        user_id: Optional[int] = None,
        project_id: Optional[str] = None,
        status: Optional[TaskStatus] = None,
    ) -> Sequence[Task]:
        where = ["1=1"]
        params: list = []
        if user_id is not None:
            where.append("user_id=%s")
            params.append(int(user_id))
        if project_id is not None:
            where.append("project_id=%s")
            params.append(project_id)
        if status is not None:
            where.append("status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM tasks
                WHERE {' AND '.join(where)}
                ORDER BY due_date IS NULL, due_date ASC, created_at ASC
                """,
                tuple(params),
            )
            return [_row_to_task(r) for r in fetchall(cur)]

    def get_by_id(self, task_id: str) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tasks WHERE task_id=%s", (task_id,))
            row = fetchone(cur)
            return _row_to_task(row) if row else None

    def insert(self, task: Task) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tasks(task_id, user_id, title, status, project_id, tag, due_date, detail)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    task.task_id,
                    task.user_id,
                    task.title,
                    task.status.value,
                    task.project_id,
                    task.tag,
                    task.due_date,
                    task.detail,
                ),
            )

    def update(self, task: Task) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE tasks
                SET title=%s, status=%s, project_id=%s, tag=%s, due_date=%s, detail=%s,
                    updated_at=CURRENT_TIMESTAMP
                WHERE task_id=%s
                """,
                (
                    task.title,
                    task.status.value,
                    task.project_id,
                    task.tag,
                    task.due_date,
                    task.detail,
                    task.task_id,
                ),
            )
            return cur.rowcount > 0

    def delete(self, task_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tasks WHERE task_id=%s", (task_id,))
            return cur.rowcount > 0

    def detach_project(self, project_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE tasks SET project_id=NULL WHERE project_id=%s", (project_id,))
            return int(cur.rowcount)
