from __future__ import annotations

from datetime import date, time

import pytest

from team_scheduler.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from team_scheduler.attendance.service import AttendanceService, sanitize_log
from team_scheduler.core.enums import AttendanceEntryType
from team_scheduler.core.exceptions import ValidationError


def _full_day(check_in="09:00", check_out="18:00"):
    return [
        {"type": "check_in", "time": check_in},
        {"type": "break_start", "time": "12:00"},
        {"type": "break_end", "time": "13:00"},
        {"type": "check_out", "time": check_out},
    ]


def test_sanitize_log_drops_bad_entries_and_keeps_order():
    raw = [
        {"type": "check_out", "time": "18:00:00"},
        {"type": "lunch", "time": "12:00"},
        {"type": "check_in", "time": "25:99"},
        "garbage",
        {"type": "check_in", "time": "09:00"},
    ]

    entries = sanitize_log(raw)

    assert [(e.type.value, e.time) for e in entries] == [("check_out", time(18, 0)), ("check_in", time(9, 0))]


def test_record_entry_appends_and_upserts(fixed_now):
    repo = InMemoryAttendanceRepository()
    svc = AttendanceService(repo, clock=lambda: fixed_now)

    first = svc.record_entry(user_id=2, entry_type="check_in", at="09:00")
    second = svc.record_entry(user_id=2, entry_type=AttendanceEntryType.CHECK_OUT)

    assert first.work_date == fixed_now.date()
    assert second.attendance_id == first.attendance_id
    assert [e.type for e in second.log] == [AttendanceEntryType.CHECK_IN, AttendanceEntryType.CHECK_OUT]
    assert second.log[1].time == time(10, 30, 0)
    assert len(repo.list_range(user_id=2)) == 1


def test_record_entry_rejects_unknown_type(fixed_now):
    svc = AttendanceService(InMemoryAttendanceRepository(), clock=lambda: fixed_now)

    with pytest.raises(ValidationError):
        svc.record_entry(user_id=2, entry_type="nap")


def test_save_day_replaces_log_and_get_day(fixed_now):
    svc = AttendanceService(InMemoryAttendanceRepository(), clock=lambda: fixed_now)
    day = date(2025, 3, 10)

    svc.save_day(user_id=2, work_date=day, log=_full_day())
    svc.save_day(user_id=2, work_date=day, log=_full_day(check_out="17:00"))

    saved = svc.get_day(user_id=2, work_date=day)
    assert svc.work_time(saved).actual_minutes == 7 * 60
    assert svc.get_day(user_id=2, work_date=date(2025, 3, 11)) is None
    assert svc.work_time(None).actual_minutes == 0


def test_list_days_rejects_inverted_range(fixed_now):
    svc = AttendanceService(InMemoryAttendanceRepository(), clock=lambda: fixed_now)

    with pytest.raises(ValidationError):
        svc.list_days(user_id=2, start=date(2025, 3, 10), end=date(2025, 3, 1))


def test_summary_weekly_and_monthly_windows(fixed_now):
    svc = AttendanceService(InMemoryAttendanceRepository(), clock=lambda: fixed_now)
    today = date(2025, 3, 14)

    svc.save_day(user_id=2, work_date=date(2025, 3, 14), log=_full_day())  # 8h
    svc.save_day(user_id=2, work_date=date(2025, 3, 7), log=_full_day())  # today - 7: both windows
    svc.save_day(user_id=2, work_date=date(2025, 3, 3), log=_full_day())  # month only
    svc.save_day(user_id=2, work_date=date(2025, 2, 28), log=_full_day())  # outside both
    svc.save_day(user_id=2, work_date=date(2025, 3, 15), log=_full_day())  # future
    svc.save_day(user_id=3, work_date=date(2025, 3, 14), log=_full_day())  # other user

    summary = svc.summary(user_id=2, today=today)

    assert summary.weekly_minutes == 2 * 480
    assert summary.monthly_minutes == 3 * 480
    assert summary.to_dict()["monthly_formatted"] == "24:00"


def test_summary_week_spans_previous_month():
    svc = AttendanceService(InMemoryAttendanceRepository())

    svc.save_day(user_id=2, work_date=date(2025, 2, 27), log=_full_day())

    summary = svc.summary(user_id=2, today=date(2025, 3, 2))
    assert summary.weekly_minutes == 480
    assert summary.monthly_minutes == 0


def test_sanitize_log_drops_non_string_times():
    entries = sanitize_log([{"type": "check_in", "time": 930}, {"type": "check_out", "time": "18:00"}])

    assert [(e.type.value, e.time) for e in entries] == [("check_out", time(18, 0))]


def test_record_entry_rejects_non_string_time(fixed_now):
    svc = AttendanceService(InMemoryAttendanceRepository(), clock=lambda: fixed_now)

    with pytest.raises(ValidationError):
        svc.record_entry(user_id=2, entry_type="check_in", at=930)
