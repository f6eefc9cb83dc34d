from __future__ import annotations

from datetime import time

from team_scheduler.attendance.calculator.standard_calculator import StandardWorkTimeCalculator
from team_scheduler.attendance.model import AttendanceEntry
from team_scheduler.core.enums import AttendanceEntryType as T


def _log(*pairs):
    return [AttendanceEntry(type=t, time=time.fromisoformat(s)) for t, s in pairs]


def test_standard_calculator_subtracts_breaks():
    log = _log(
        (T.CHECK_IN, "09:00:00"),
        (T.BREAK_START, "12:00:00"),
        (T.BREAK_END, "13:00:00"),
        (T.BREAK_START, "15:00:00"),
        (T.BREAK_END, "15:15:00"),
        (T.CHECK_OUT, "18:30:00"),
    )

    result = StandardWorkTimeCalculator().calculate(log)

    assert result.total_minutes == 570
    assert result.break_minutes == 75
    assert result.actual_minutes == 495
    assert result.to_dict()["formatted_actual_work_time"] == "08:15"


def test_missing_check_out_means_zero_total():
    log = _log((T.CHECK_IN, "09:00:00"), (T.BREAK_START, "12:00:00"), (T.BREAK_END, "12:30:00"))

    result = StandardWorkTimeCalculator().calculate(log)

    assert result.total_minutes == 0
    assert result.break_minutes == 30
    assert result.actual_minutes == 0


def test_unpaired_break_markers_are_ignored():
    log = _log(
        (T.BREAK_END, "08:00:00"),
        (T.CHECK_IN, "09:00:00"),
        (T.BREAK_START, "12:00:00"),
        (T.CHECK_OUT, "17:00:00"),
    )

    result = StandardWorkTimeCalculator().calculate(log)

    assert result.break_minutes == 0
    assert result.actual_minutes == 480


def test_second_break_start_replaces_open_break():
    log = _log(
        (T.CHECK_IN, "09:00:00"),
        (T.BREAK_START, "12:00:00"),
        (T.BREAK_START, "12:30:00"),
        (T.BREAK_END, "13:00:00"),
        (T.CHECK_OUT, "18:00:00"),
    )

    result = StandardWorkTimeCalculator().calculate(log)

    assert result.break_minutes == 30
    assert result.actual_minutes == 510


def test_break_ending_before_it_starts_counts_as_zero():
    log = _log(
        (T.CHECK_IN, "09:00:00"),
        (T.BREAK_START, "13:00:00"),
        (T.BREAK_END, "12:00:00"),
        (T.CHECK_OUT, "18:00:00"),
    )

    result = StandardWorkTimeCalculator().calculate(log)

    assert result.break_minutes == 0
    assert result.actual_minutes == 540


def test_check_out_before_check_in_clamps_to_zero():
    log = _log((T.CHECK_IN, "18:00:00"), (T.CHECK_OUT, "09:00:00"))

    assert StandardWorkTimeCalculator().calculate(log).total_minutes == 0


def test_first_check_in_and_out_win():
    log = _log(
        (T.CHECK_IN, "09:00:00"),
        (T.CHECK_OUT, "12:00:00"),
        (T.CHECK_IN, "13:00:00"),
        (T.CHECK_OUT, "18:00:00"),
    )

    assert StandardWorkTimeCalculator().calculate(log).total_minutes == 180
