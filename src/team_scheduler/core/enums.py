from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    MEMBER = "member"


class WorkType(str, Enum):
    """Where a scheduled day is worked."""

    OFFICE = "office"
    REMOTE = "remote"


class TaskStatus(str, Enum):
    OPEN = "open"
    DONE = "done"


class AttendanceEntryType(str, Enum):
    """Marker types stored in a day's attendance log."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"
    BREAK_START = "break_start"
    BREAK_END = "break_end"
