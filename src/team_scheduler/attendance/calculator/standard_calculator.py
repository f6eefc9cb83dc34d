from __future__ import annotations

from datetime import datetime, time
from typing import Optional, Sequence

from ...core.enums import AttendanceEntryType
from ..model import AttendanceEntry, WorkTime
from .base import WorkTimeCalculator


def _minutes_between(start: time, end: time) -> int:
    anchor = datetime.min.date()
    delta = datetime.combine(anchor, end) - datetime.combine(anchor, start)
    # whole minutes, truncated toward zero
    return int(delta.total_seconds() / 60)


class StandardWorkTimeCalculator(WorkTimeCalculator):
    """Standard rule: (first check_out - first check_in) - sum(break pairs), not below 0.

    Breaks pair a break_start with the next break_end in log order. A break_end with no
    open break is ignored, as is a trailing break_start; a second break_start replaces
    the open one.
    """

    def calculate(self, log: Sequence[AttendanceEntry]) -> WorkTime:
        check_in = next((e for e in log if e.type == AttendanceEntryType.CHECK_IN), None)
        check_out = next((e for e in log if e.type == AttendanceEntryType.CHECK_OUT), None)

        total = 0
        if check_in and check_out:
            total = max(_minutes_between(check_in.time, check_out.time), 0)

        breaks = 0
        open_break: Optional[time] = None
        for entry in log:
            if entry.type == AttendanceEntryType.BREAK_START:
                open_break = entry.time
            elif entry.type == AttendanceEntryType.BREAK_END and open_break is not None:
                breaks += max(_minutes_between(open_break, entry.time), 0)
                open_break = None

        return WorkTime(total_minutes=total, break_minutes=breaks, actual_minutes=max(total - breaks, 0))
