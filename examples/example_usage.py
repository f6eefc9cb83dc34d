"""Example: use the service layer directly (no Flask).

Controllers are thin; business rules live in the services.
"""

from datetime import date

from config import get_settings_module

import importlib

from team_scheduler.container import build_container
from team_scheduler.core.enums import AttendanceEntryType


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)

    day = container.attendance_service.record_entry(
        user_id=1, work_date=date.today(), entry_type=AttendanceEntryType.CHECK_IN, at="09:00"
    )
    print(day.to_dict())
    print(container.attendance_service.summary(user_id=1).to_dict())


if __name__ == "__main__":
    main()
