from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date
from typing import Optional

import pandas as pd

from ..attendance.calculator.base import WorkTimeCalculator
from ..attendance.calculator.standard_calculator import StandardWorkTimeCalculator
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_minutes
from ..core.enums import AttendanceEntryType
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository

REPORT_FIELDS = [
    "work_date",
    "user_id",
    "name",
    "sheet_name",
    "check_in",
    "check_out",
    "break_time",
    "total_time",
    "actual_time",
]


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class AttendanceReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        calculator: Optional[WorkTimeCalculator] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._calculator = calculator or StandardWorkTimeCalculator()

    def build_attendance_report(self, *, start: date, end: date, user_id: Optional[int] = None) -> ReportData:
        if end < start:
            raise ValidationError("End date must not be earlier than start date")

        names = {u.user_id: u for u in self._users.list_all()}
        summary_map: dict[int, dict] = {}
        out_rows: list[dict] = []

        for day in self._attendance.list_range(user_id=user_id, start=start, end=end):
            work = self._calculator.calculate(day.log)
            user = names.get(day.user_id)
            check_in = day.first(AttendanceEntryType.CHECK_IN)
            check_out = day.first(AttendanceEntryType.CHECK_OUT)

            out_rows.append(
                {
                    "work_date": day.work_date.strftime("%Y-%m-%d"),
                    "user_id": day.user_id,
                    "name": user.name if user else "Unknown",
                    "sheet_name": user.sheet_name if user else "",
                    "check_in": check_in.time.strftime("%H:%M") if check_in else "-",
                    "check_out": check_out.time.strftime("%H:%M") if check_out else "-",
                    "break_time": format_minutes(work.break_minutes),
                    "total_time": format_minutes(work.total_minutes),
                    "actual_time": format_minutes(work.actual_minutes),
                }
            )

            s = summary_map.get(day.user_id)
            if not s:
                s = {
                    "user_id": day.user_id,
                    "name": user.name if user else "Unknown",
                    "days": 0,
                    "total_minutes": 0,
                }
                summary_map[day.user_id] = s
            s["days"] += 1
            s["total_minutes"] += work.actual_minutes

        summary = sorted(summary_map.values(), key=lambda x: x["total_minutes"], reverse=True)
        for s in summary:
            s["total_time"] = format_minutes(s["total_minutes"])
        return ReportData(rows=out_rows, summary=summary)


def report_to_csv(data: ReportData) -> bytes:
    """CSV bytes with a BOM so spreadsheet apps detect UTF-8."""
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=REPORT_FIELDS)
    writer.writeheader()
    for row in data.rows:
        writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")


def report_to_xlsx(data: ReportData) -> io.BytesIO:
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        pd.DataFrame(data.rows, columns=REPORT_FIELDS).to_excel(writer, index=False, sheet_name="Attendance")
        pd.DataFrame(data.summary, columns=["user_id", "name", "days", "total_minutes", "total_time"]).to_excel(
            writer, index=False, sheet_name="Summary"
        )
    output.seek(0)
    return output
