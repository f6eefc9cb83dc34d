from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceDay, AttendanceEntry


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceDay]:
        raise NotImplementedError

    def list_range(
        self,
        *,
        user_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceDay]:
        """Days ordered by (work_date, user_id); bounds are inclusive."""
        raise NotImplementedError

    def upsert_log(
        self,
        *,
        attendance_id: str,
        user_id: int,
        work_date: date,
        log: Sequence[AttendanceEntry],
    ) -> AttendanceDay:
        """Insert the (user, date) row or replace its log; an existing row keeps its id."""
        raise NotImplementedError
