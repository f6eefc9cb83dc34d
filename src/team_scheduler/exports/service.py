from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Optional
from urllib.parse import quote

from ..common.datetime_utils import today_local
from ..core.constants import (
    DEFAULT_CALENDAR_DESCRIPTION,
    DEFAULT_CALENDAR_NAME,
    DEFAULT_CALENDAR_TIME_ZONE,
    DEFAULT_EVENT_COLOR_ID,
    DEFAULT_EXPORT_DAYS,
    TASK_COLOR_ID,
    WORK_TYPE_COLOR_IDS,
)
from ..core.exceptions import AuthorizationError, DomainError, ValidationError
from ..events.model import Event
from ..events.repository import EventRepository
from ..logging_config import get_logger
from ..tasks.model import Task
from ..tasks.repository import TaskRepository
from ..users.repository import UserRepository
from .calendar_client import CalendarGateway

logger = get_logger(__name__)

EMBED_URL = "https://calendar.google.com/calendar/embed?src={}"


@dataclass(frozen=True)
class ExportResult:
    calendar_id: str
    calendar_url: str
    events_total: int
    events_exported: int
    tasks_total: int
    tasks_exported: int

    def to_dict(self) -> dict:
        return {
            "calendarId": self.calendar_id,
            "calendarUrl": self.calendar_url,
            "stats": {
                "events": {"total": self.events_total, "exported": self.events_exported},
                "tasks": {"total": self.tasks_total, "exported": self.tasks_exported},
            },
        }


def event_body(event: Event, time_zone: str) -> dict:
    return {
        "summary": f"[{event.work_type.value}] {event.title}",
        "description": event.description or "",
        "start": {"dateTime": event.start_time.isoformat(), "timeZone": time_zone},
        "end": {"dateTime": event.end_time.isoformat(), "timeZone": time_zone},
        "colorId": WORK_TYPE_COLOR_IDS.get(event.work_type.value, DEFAULT_EVENT_COLOR_ID),
    }


def task_body(task: Task) -> dict:
    # all-day events: the end date is exclusive
    return {
        "summary": f"[Task] {task.title}",
        "description": task.detail or "",
        "start": {"date": task.due_date.isoformat()},
        "end": {"date": (task.due_date + timedelta(days=1)).isoformat()},
        "colorId": TASK_COLOR_ID,
    }


class CalendarExportService:
    def __init__(
        self,
        calendar: CalendarGateway,
        users: UserRepository,
        events: EventRepository,
        tasks: TaskRepository,
        *,
        calendar_name: str = DEFAULT_CALENDAR_NAME,
        time_zone: str = DEFAULT_CALENDAR_TIME_ZONE,
        default_days: int = DEFAULT_EXPORT_DAYS,
        today: Callable[[], date] = today_local,
    ):
        self._calendar = calendar
        self._users = users
        self._events = events
        self._tasks = tasks
        self._calendar_name = calendar_name
        self._time_zone = time_zone
        self._default_days = default_days
        self._today = today

    def resolve_access_token(self, *, user_id: int, access_token: Optional[str]) -> str:
        if access_token is not None and not isinstance(access_token, str):
            raise ValidationError("access_token must be a string")
        if access_token and access_token.strip():
            return access_token.strip()
        user = self._users.get_by_id(user_id)
        if user and user.google_access_token:
            return user.google_access_token
        raise AuthorizationError("Google access token not found. Please sign in with Google again.")

    def _insert_all(self, *, token: str, calendar_id: str, kind: str, items: list, to_body) -> int:
        exported = 0
        for item in items:
            try:
                self._calendar.insert_event(access_token=token, calendar_id=calendar_id, body=to_body(item))
                exported += 1
            except DomainError as e:
                logger.warning("Calendar item export failed", kind=kind, calendar_id=calendar_id, error=str(e))
        return exported

    def export_calendar(
        self,
        *,
        user_id: int,
        include_events: bool = True,
        include_tasks: bool = True,
        days: Optional[int] = None,
        access_token: Optional[str] = None,
        today: Optional[date] = None,
    ) -> ExportResult:
        days = self._default_days if days is None else int(days)
        if days < 0:
            raise ValidationError("days must not be negative")

        token = self.resolve_access_token(user_id=user_id, access_token=access_token)
        start = today or self._today()
        end = start + timedelta(days=days)

        calendar_id = self._calendar.create_calendar(
            access_token=token,
            summary=self._calendar_name,
            description=DEFAULT_CALENDAR_DESCRIPTION,
            time_zone=self._time_zone,
        )

        events = list(self._events.list_events(user_id=user_id, start=start, end=end)) if include_events else []
        tasks = []
        if include_tasks:
            tasks = [
                t for t in self._tasks.list_tasks(user_id=user_id) if t.due_date and start <= t.due_date <= end
            ]

        events_exported = self._insert_all(
            token=token,
            calendar_id=calendar_id,
            kind="event",
            items=events,
            to_body=lambda e: event_body(e, self._time_zone),
        )
        tasks_exported = self._insert_all(
            token=token, calendar_id=calendar_id, kind="task", items=tasks, to_body=task_body
        )

        logger.info(
            "Calendar exported",
            user_id=user_id,
            calendar_id=calendar_id,
            events=f"{events_exported}/{len(events)}",
            tasks=f"{tasks_exported}/{len(tasks)}",
        )
        return ExportResult(
            calendar_id=calendar_id,
            calendar_url=EMBED_URL.format(quote(calendar_id, safe="")),
            events_total=len(events),
            events_exported=events_exported,
            tasks_total=len(tasks),
            tasks_exported=tasks_exported,
        )
