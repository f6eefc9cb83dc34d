from __future__ import annotations

import uuid
from datetime import date, time, timedelta
from typing import Any, Callable, Iterable, List, Optional, Tuple

from ..common.datetime_utils import now_local, parse_clock_time
from ..common.validators import require_enum
from ..core.constants import WEEKLY_WINDOW_DAYS
from ..core.enums import AttendanceEntryType
from ..core.exceptions import ValidationError
from ..logging_config import get_logger
from .calculator.base import WorkTimeCalculator
from .calculator.standard_calculator import StandardWorkTimeCalculator
from .model import AttendanceDay, AttendanceEntry, AttendanceSummary, WorkTime
from .repository import AttendanceRepository

logger = get_logger(__name__)


def sanitize_log(raw_log: Iterable[Any]) -> Tuple[AttendanceEntry, ...]:
    """Keep well-formed entries in their original order; drop the rest."""
    entries = []
    for raw in raw_log or []:
        if isinstance(raw, AttendanceEntry):
            entries.append(raw)
            continue
        if not isinstance(raw, dict):
            continue
        try:
            entry_type = AttendanceEntryType(raw.get("type"))
            entry_time = parse_clock_time(raw.get("time"))
        except (ValueError, ValidationError):
            continue
        entries.append(AttendanceEntry(type=entry_type, time=entry_time))
    return tuple(entries)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        calculator: Optional[WorkTimeCalculator] = None,
        clock: Callable = now_local,
    ):
        self._attendance = attendance
        self._calculator = calculator or StandardWorkTimeCalculator()
        self._clock = clock

    def get_day(self, *, user_id: int, work_date: date) -> Optional[AttendanceDay]:
        return self._attendance.get_for_user_and_date(user_id, work_date)

    def list_days(
        self,
        *,
        user_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[AttendanceDay]:
        if start and end and end < start:
            raise ValidationError("End date must not be earlier than start date")
        return list(self._attendance.list_range(user_id=user_id, start=start, end=end))

    def save_day(self, *, user_id: int, work_date: date, log: Iterable[Any]) -> AttendanceDay:
        entries = sanitize_log(log)
        return self._attendance.upsert_log(
            attendance_id=str(uuid.uuid4()),
            user_id=int(user_id),
            work_date=work_date,
            log=entries,
        )

    def record_entry(
        self,
        *,
        user_id: int,
        work_date: Optional[date] = None,
        entry_type: AttendanceEntryType | str,
        at: Optional[time | str] = None,
    ) -> AttendanceDay:
        now = self._clock()
        work_date = work_date or now.date()
        entry = AttendanceEntry(
            type=require_enum(entry_type, AttendanceEntryType, "type"),
            time=parse_clock_time(at) if at else now.time().replace(microsecond=0),
        )

        current = self._attendance.get_for_user_and_date(user_id, work_date)
        log = (current.log if current else ()) + (entry,)
        day = self.save_day(user_id=user_id, work_date=work_date, log=log)
        logger.info("Attendance entry recorded", user_id=user_id, work_date=str(work_date), type=entry.type.value)
        return day

    def work_time(self, day: Optional[AttendanceDay]) -> WorkTime:
        return self._calculator.calculate(day.log if day else ())

    def summary(self, *, user_id: int, today: Optional[date] = None) -> AttendanceSummary:
        """Actual minutes over the last 7 days and over the month so far (both ending today)."""
        today = today or self._clock().date()
        week_start = today - timedelta(days=WEEKLY_WINDOW_DAYS)
        month_start = today.replace(day=1)

        weekly = 0
        monthly = 0
        for day in self._attendance.list_range(user_id=user_id, start=min(week_start, month_start), end=today):
            minutes = self.work_time(day).actual_minutes
            if week_start <= day.work_date <= today:
                weekly += minutes
            if month_start <= day.work_date <= today:
                monthly += minutes

        return AttendanceSummary(weekly_minutes=weekly, monthly_minutes=monthly)
