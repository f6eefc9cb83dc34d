from __future__ import annotations

import io
from datetime import date

import pandas as pd
import pytest

from team_scheduler.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from team_scheduler.attendance.service import AttendanceService
from team_scheduler.core.exceptions import ValidationError
from team_scheduler.reports.service import AttendanceReportService, report_to_csv, report_to_xlsx


def _log(check_in: str, check_out: str, break_minutes: int = 60):
    end = f"12:{break_minutes:02d}" if break_minutes < 60 else "13:00"
    return [
        {"type": "check_in", "time": check_in},
        {"type": "break_start", "time": "12:00"},
        {"type": "break_end", "time": end},
        {"type": "check_out", "time": check_out},
    ]


@pytest.fixture
def report_svc(users_repo):
    repo = InMemoryAttendanceRepository()
    attendance = AttendanceService(repo)
    attendance.save_day(user_id=2, work_date=date(2025, 3, 3), log=_log("09:00", "18:00"))
    attendance.save_day(user_id=2, work_date=date(2025, 3, 4), log=[{"type": "check_in", "time": "09:00"}])
    attendance.save_day(user_id=3, work_date=date(2025, 3, 3), log=_log("08:30", "19:30", 30))
    attendance.save_day(user_id=3, work_date=date(2025, 4, 1), log=_log("09:00", "18:00"))
    return AttendanceReportService(repo, users_repo)


def test_report_rows_and_summary_sorted_desc(report_svc):
    report = report_svc.build_attendance_report(start=date(2025, 3, 1), end=date(2025, 3, 31))

    assert len(report.rows) == 3
    first = report.rows[0]
    assert first["work_date"] == "2025-03-03"
    assert first["check_in"] == "09:00"
    assert first["break_time"] == "01:00"
    assert first["actual_time"] == "08:00"
    assert report.rows[2]["check_out"] == "-"

    assert [s["user_id"] for s in report.summary] == [3, 2]
    assert report.summary[0]["total_time"] == "10:30"
    assert report.summary[1]["days"] == 2


def test_report_user_filter_and_range_validation(report_svc):
    report = report_svc.build_attendance_report(start=date(2025, 3, 1), end=date(2025, 4, 30), user_id=3)
    assert {r["user_id"] for r in report.rows} == {3}
    assert len(report.rows) == 2

    with pytest.raises(ValidationError):
        report_svc.build_attendance_report(start=date(2025, 3, 31), end=date(2025, 3, 1))


def test_csv_export_has_bom_and_header(report_svc):
    report = report_svc.build_attendance_report(start=date(2025, 3, 1), end=date(2025, 3, 31))

    data = report_to_csv(report)

    assert data.startswith("\ufeff".encode("utf-8"))
    text = data.decode("utf-8-sig")
    assert text.splitlines()[0].startswith("work_date,user_id,name")
    assert "Hanako Sato" in text


def test_xlsx_export_round_trips_through_pandas(report_svc):
    report = report_svc.build_attendance_report(start=date(2025, 3, 1), end=date(2025, 3, 31))

    sheets = pd.read_excel(io.BytesIO(report_to_xlsx(report).getvalue()), sheet_name=None, engine="openpyxl")

    assert set(sheets) == {"Attendance", "Summary"}
    assert len(sheets["Attendance"]) == 3
    assert list(sheets["Summary"]["user_id"]) == [3, 2]
