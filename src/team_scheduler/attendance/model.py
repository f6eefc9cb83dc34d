from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Optional, Tuple

from ..common.datetime_utils import format_minutes
from ..core.enums import AttendanceEntryType


@dataclass(frozen=True)
class AttendanceEntry:
    """One marker in a day's log."""

    type: AttendanceEntryType
    time: time

    def to_dict(self) -> dict:
        return {"type": self.type.value, "time": self.time.strftime("%H:%M:%S")}


@dataclass(frozen=True)
class AttendanceDay:
    """Domain entity: a user's attendance log for one date (unique per user and date)."""

    attendance_id: str
    user_id: int
    work_date: date
    log: Tuple[AttendanceEntry, ...] = field(default_factory=tuple)

    def first(self, entry_type: AttendanceEntryType) -> Optional[AttendanceEntry]:
        return next((e for e in self.log if e.type == entry_type), None)

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "user_id": self.user_id,
            "date": self.work_date.isoformat(),
            "attendance_log": [e.to_dict() for e in self.log],
        }


@dataclass(frozen=True)
class WorkTime:
    total_minutes: int
    break_minutes: int
    actual_minutes: int

    def to_dict(self) -> dict:
        return {
            "total_work_minutes": self.total_minutes,
            "total_break_minutes": self.break_minutes,
            "actual_work_minutes": self.actual_minutes,
            "formatted_work_time": format_minutes(self.total_minutes),
            "formatted_break_time": format_minutes(self.break_minutes),
            "formatted_actual_work_time": format_minutes(self.actual_minutes),
        }


@dataclass(frozen=True)
class AttendanceSummary:
    weekly_minutes: int
    monthly_minutes: int

    def to_dict(self) -> dict:
        return {
            "weekly_minutes": self.weekly_minutes,
            "monthly_minutes": self.monthly_minutes,
            "weekly_formatted": format_minutes(self.weekly_minutes),
            "monthly_formatted": format_minutes(self.monthly_minutes),
        }
