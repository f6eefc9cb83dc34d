from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import WorkType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Event
from .repository import EventRepository

_COLUMNS = "event_id, user_id, title, description, start_time, end_time, work_type"


def _row_to_event(row: dict) -> Event:
    return Event(
        event_id=row["event_id"],
        user_id=int(row["user_id"]),
        title=row["title"],
        description=row.get("description"),
        start_time=row["start_time"],
        end_time=row["end_time"],
        work_type=WorkType(row["work_type"]),
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_events(
        self,
        *,
        user_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Event]:
        where = ["1=1"]
        params: list = []
        if user_id is not None:
            where.append("user_id=%s")
            params.append(int(user_id))
        if start is not None:
            where.append("DATE(start_time) >= %s")
            params.append(start)
        if end is not None:
            where.append("DATE(start_time) <= %s")
            params.append(end)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM events WHERE {' AND '.join(where)} ORDER BY start_time ASC",
                tuple(params),
            )
            return [_row_to_event(r) for r in fetchall(cur)]

    def get_by_id(self, event_id: str) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events WHERE event_id=%s", (event_id,))
            row = fetchone(cur)
            return _row_to_event(row) if row else None

    def insert(self, event: Event) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO events(event_id, user_id, title, description, start_time, end_time, work_type)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    event.event_id,
                    event.user_id,
                    event.title,
                    event.description,
                    event.start_time,
                    event.end_time,
                    event.work_type.value,
                ),
            )

    def update(self, event: Event) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE events
                SET title=%s, description=%s, start_time=%s, end_time=%s, work_type=%s,
                    updated_at=CURRENT_TIMESTAMP
                WHERE event_id=%s
                """,
                (
                    event.title,
                    event.description,
                    event.start_time,
                    event.end_time,
                    event.work_type.value,
                    event.event_id,
                ),
            )
            return cur.rowcount > 0

    def delete(self, event_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM events WHERE event_id=%s", (event_id,))
            return cur.rowcount > 0

    def exists(self, event: Event) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT 1 AS found FROM events
                WHERE user_id=%s AND start_time=%s AND end_time=%s AND work_type=%s
                LIMIT 1
                """,
                (event.user_id, event.start_time, event.end_time, event.work_type.value),
            )
            return fetchone(cur) is not None
