from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_CALENDAR_NAME, DEFAULT_CALENDAR_TIME_ZONE, DEFAULT_EXPORT_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .events.memory_event_repository import InMemoryEventRepository
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .events.service import EventService
from .exports.calendar_client import CalendarGateway, GoogleCalendarClient
from .exports.service import CalendarExportService
from .imports.service import SheetImportService
from .imports.sheets_client import GoogleSheetsClient, SheetsGateway
from .projects.memory_project_repository import InMemoryProjectRepository
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .projects.service import ProjectService
from .push.memory_push_repository import InMemoryPushSubscriptionRepository
from .push.mysql_push_repository import MySQLPushSubscriptionRepository
from .push.repository import PushSubscriptionRepository
from .push.sender import PushSender, WebPushSender
from .push.service import PushService
from .reports.service import AttendanceReportService
from .tasks.memory_task_repository import InMemoryTaskRepository
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.repository import TaskRepository
from .tasks.service import TaskService
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService

STORAGE_MYSQL = "mysql"
STORAGE_MEMORY = "memory"


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    events_repo: EventRepository
    tasks_repo: TaskRepository
    projects_repo: ProjectRepository
    attendance_repo: AttendanceRepository
    push_repo: PushSubscriptionRepository

    user_service: UserService
    event_service: EventService
    task_service: TaskService
    project_service: ProjectService
    attendance_service: AttendanceService
    report_service: AttendanceReportService
    sheet_import_service: SheetImportService
    calendar_export_service: CalendarExportService
    push_service: PushService


def build_container(
    *,
    settings: Any,
    sheets: Optional[SheetsGateway] = None,
    calendar: Optional[CalendarGateway] = None,
    push_sender: Optional[PushSender] = None,
) -> Container:
    """Wire repositories for the configured backend, then the services.

    The Google and Web Push gateways can be swapped (tests pass fakes).
    """
    backend = str(getattr(settings, "STORAGE_BACKEND", STORAGE_MYSQL)).lower()

    conn: Optional[DatabaseConnection] = None
    if backend == STORAGE_MYSQL:
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        users_repo = MySQLUserRepository(conn)
        events_repo = MySQLEventRepository(conn)
        tasks_repo = MySQLTaskRepository(conn)
        projects_repo = MySQLProjectRepository(conn)
        attendance_repo = MySQLAttendanceRepository(conn)
        push_repo = MySQLPushSubscriptionRepository(conn)
    elif backend == STORAGE_MEMORY:
        users_repo = InMemoryUserRepository()
        events_repo = InMemoryEventRepository()
        tasks_repo = InMemoryTaskRepository()
        projects_repo = InMemoryProjectRepository()
        attendance_repo = InMemoryAttendanceRepository()
        push_repo = InMemoryPushSubscriptionRepository()
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")

    sheets = sheets or GoogleSheetsClient(
        credentials_json=getattr(settings, "GOOGLE_CREDENTIALS_JSON", None),
        credentials_path=getattr(settings, "GOOGLE_APPLICATION_CREDENTIALS", None),
    )
    calendar = calendar or GoogleCalendarClient()
    push_sender = push_sender or WebPushSender(
        vapid_private_key=getattr(settings, "VAPID_PRIVATE_KEY", None),
        vapid_claim_email=getattr(settings, "VAPID_CLAIM_EMAIL", None),
    )

    user_service = UserService(users_repo)
    event_service = EventService(events_repo)
    task_service = TaskService(tasks_repo, projects_repo)
    project_service = ProjectService(projects_repo, tasks_repo, users_repo)
    attendance_service = AttendanceService(attendance_repo)
    report_service = AttendanceReportService(attendance_repo, users_repo)
    sheet_import_service = SheetImportService(sheets, users_repo, event_service)
    calendar_export_service = CalendarExportService(
        calendar,
        users_repo,
        events_repo,
        tasks_repo,
        calendar_name=getattr(settings, "CALENDAR_NAME", DEFAULT_CALENDAR_NAME),
        time_zone=getattr(settings, "CALENDAR_TIME_ZONE", DEFAULT_CALENDAR_TIME_ZONE),
        default_days=int(getattr(settings, "EXPORT_DAYS", DEFAULT_EXPORT_DAYS)),
    )
    push_service = PushService(
        push_repo,
        push_sender,
        vapid_public_key=getattr(settings, "VAPID_PUBLIC_KEY", None),
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        events_repo=events_repo,
        tasks_repo=tasks_repo,
        projects_repo=projects_repo,
        attendance_repo=attendance_repo,
        push_repo=push_repo,
        user_service=user_service,
        event_service=event_service,
        task_service=task_service,
        project_service=project_service,
        attendance_service=attendance_service,
        report_service=report_service,
        sheet_import_service=sheet_import_service,
        calendar_export_service=calendar_export_service,
        push_service=push_service,
    )
