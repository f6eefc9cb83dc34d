"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_WORK_START = time(9, 0)
DEFAULT_WORK_END = time(18, 0)

DEFAULT_EXPORT_DAYS = 20
WEEKLY_WINDOW_DAYS = 7

DEFAULT_CALENDAR_NAME = "Team Schedule"
DEFAULT_CALENDAR_DESCRIPTION = "Calendar exported from Team Scheduler"
DEFAULT_CALENDAR_TIME_ZONE = "Asia/Tokyo"

# Google Calendar colorId values
WORK_TYPE_COLOR_IDS = {
    "office": "9",
    "remote": "10",
}
DEFAULT_EVENT_COLOR_ID = "1"
TASK_COLOR_ID = "5"

PRE_REGISTERED_SUB_PREFIX = "pre_registered_"
PENDING_APPROVAL_URL = "/admin?tab=pending"
