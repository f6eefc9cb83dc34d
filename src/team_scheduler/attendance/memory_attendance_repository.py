from __future__ import annotations

from datetime import date
from typing import Dict, Optional, Sequence, Tuple

from .model import AttendanceDay, AttendanceEntry
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    def __init__(self, days: Sequence[AttendanceDay] = ()):
        self._days: Dict[Tuple[int, date], AttendanceDay] = {(d.user_id, d.work_date): d for d in days}

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceDay]:
        return self._days.get((int(user_id), work_date))

    def list_range(
        self,
        *,
        user_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceDay]:
        out = [
            d
            for d in self._days.values()
            if (user_id is None or d.user_id == int(user_id))
            and (start is None or d.work_date >= start)
            and (end is None or d.work_date <= end)
        ]
        return sorted(out, key=lambda d: (d.work_date, d.user_id))

    def upsert_log(
        self,
        *,
        attendance_id: str,
        user_id: int,
        work_date: date,
        log: Sequence[AttendanceEntry],
    ) -> AttendanceDay:
        key = (int(user_id), work_date)
        existing = self._days.get(key)
        day = AttendanceDay(
            attendance_id=existing.attendance_id if existing else attendance_id,
            user_id=int(user_id),
            work_date=work_date,
            log=tuple(log),
        )
        self._days[key] = day
        return day
