from __future__ import annotations

from datetime import date, datetime

import pytest

from team_scheduler.core.enums import WorkType
from team_scheduler.core.exceptions import IntegrationError
from team_scheduler.events.memory_event_repository import InMemoryEventRepository
from team_scheduler.events.model import Event
from team_scheduler.exports.calendar_client import GoogleCalendarClient
from team_scheduler.exports.service import CalendarExportService
from team_scheduler.tasks.memory_task_repository import InMemoryTaskRepository


class FakeRequest:
    def __init__(self, result=None, error=None):
        self._result = result
        self._error = error

    def execute(self):
        if self._error:
            raise self._error
        return self._result


class FakeEventsResource:
    def __init__(self, errors):
        self._errors = list(errors)
        self.bodies = []

    def insert(self, calendarId, body):
        error = self._errors.pop(0) if self._errors else None
        if not error:
            self.bodies.append(body)
        return FakeRequest(result={"id": f"evt-{len(self.bodies)}"}, error=error)


class FakeCalendarsResource:
    def __init__(self, error=None):
        self._error = error

    def insert(self, body):
        return FakeRequest(result={"id": "cal-1"}, error=self._error)


class FakeService:
    def __init__(self, *, calendar_error=None, event_errors=()):
        self._calendars = FakeCalendarsResource(calendar_error)
        self.events_resource = FakeEventsResource(event_errors)

    def calendars(self):
        return self._calendars

    def events(self):
        return self.events_resource


def _client(service: FakeService) -> GoogleCalendarClient:
    client = GoogleCalendarClient()
    client._service = lambda access_token: service
    return client


@pytest.mark.parametrize("error", [TimeoutError("timed out"), ConnectionResetError("reset")])
def test_transport_errors_become_integration_errors(error):
    client = _client(FakeService(calendar_error=error, event_errors=[error]))

    with pytest.raises(IntegrationError):
        client.create_calendar(access_token="t", summary="s", description="d", time_zone="Asia/Tokyo")
    with pytest.raises(IntegrationError):
        client.insert_event(access_token="t", calendar_id="cal-1", body={})


def test_export_continues_after_a_timeout(users_repo):
    service = FakeService(event_errors=[TimeoutError("timed out")])
    events = InMemoryEventRepository(
        [
            Event(
                event_id=f"e{day}",
                user_id=2,
                title="Office",
                start_time=datetime(2025, 3, day, 9, 0),
                end_time=datetime(2025, 3, day, 18, 0),
                work_type=WorkType.OFFICE,
            )
            for day in (11, 12, 13)
        ]
    )
    export = CalendarExportService(
        _client(service),
        users_repo,
        events,
        InMemoryTaskRepository(),
        default_days=5,
        today=lambda: date(2025, 3, 10),
    )

    result = export.export_calendar(user_id=2, access_token="tok")

    assert (result.events_total, result.events_exported) == (3, 2)
    assert len(service.events_resource.bodies) == 2
