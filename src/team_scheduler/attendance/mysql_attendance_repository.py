from __future__ import annotations

import json
from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceEntryType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_column, normalize_mysql_date, normalize_mysql_time
from .model import AttendanceDay, AttendanceEntry
from .repository import AttendanceRepository


def _row_to_day(row: dict) -> AttendanceDay:
    log = load_json_column(row.get("attendance_log")) or []
    return AttendanceDay(
        attendance_id=row["attendance_id"],
        user_id=int(row["user_id"]),
        work_date=normalize_mysql_date(row["work_date"]),
        log=tuple(
            AttendanceEntry(type=AttendanceEntryType(e["type"]), time=normalize_mysql_time(e["time"]))
            for e in log
        ),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, user_id, work_date, attendance_log
                FROM attendance
                WHERE user_id=%s AND work_date=%s
                """,
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_day(r) if r else None

    def list_range(
        self,
        *,
        user_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceDay]:
        where = ["1=1"]
        params: list = []
        if user_id is not None:
            where.append("user_id=%s")
            params.append(int(user_id))
        if start is not None:
            where.append("work_date >= %s")
            params.append(start)
        if end is not None:
            where.append("work_date <= %s")
            params.append(end)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT attendance_id, user_id, work_date, attendance_log
                FROM attendance
                WHERE {' AND '.join(where)}
                ORDER BY work_date ASC, user_id ASC
                """,
                tuple(params),
            )
            return [_row_to_day(r) for r in fetchall(cur)]

    def upsert_log(
        self,
        *,
        attendance_id: str,
        user_id: int,
        work_date: date,
        log: Sequence[AttendanceEntry],
    ) -> AttendanceDay:
        payload = json.dumps([e.to_dict() for e in log])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(attendance_id, user_id, work_date, attendance_log)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE attendance_log=VALUES(attendance_log), updated_at=CURRENT_TIMESTAMP
                """,
                (attendance_id, int(user_id), work_date, payload),
            )
        saved = self.get_for_user_and_date(user_id, work_date)
        if saved is None:
            raise RuntimeError("Attendance row missing after upsert")
        return saved
