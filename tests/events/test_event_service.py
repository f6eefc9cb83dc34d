from __future__ import annotations

from datetime import date, datetime

import pytest

from team_scheduler.core.enums import WorkType
from team_scheduler.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from team_scheduler.events.memory_event_repository import InMemoryEventRepository
from team_scheduler.events.model import Event
from team_scheduler.events.service import EventService


def _svc():
    return EventService(InMemoryEventRepository())


def _event(event_id: str, user_id: int, day: int, work_type=WorkType.OFFICE) -> Event:
    return Event(
        event_id=event_id,
        user_id=user_id,
        title="Office",
        start_time=datetime(2025, 3, day, 9, 0),
        end_time=datetime(2025, 3, day, 18, 0),
        work_type=work_type,
    )


def test_create_event_validates_input():
    svc = _svc()

    with pytest.raises(ValidationError):
        svc.create_event(user_id=1, title=" ", start_time="2025-03-01T09:00", end_time="2025-03-01T18:00", work_type="office")
    with pytest.raises(ValidationError):
        svc.create_event(user_id=1, title="A", start_time="2025-03-01T09:00", end_time="2025-03-01T18:00", work_type="cafe")
    with pytest.raises(ValidationError):
        svc.create_event(user_id=1, title="A", start_time="2025-03-01T18:00", end_time="2025-03-01T09:00", work_type="office")


def test_create_event_accepts_iso_strings_with_z():
    svc = _svc()

    event = svc.create_event(
        user_id=1,
        title="Standup",
        start_time="2025-03-01T09:00:00Z",
        end_time="2025-03-01T09:15:00Z",
        work_type="remote",
    )

    assert event.start_time == datetime(2025, 3, 1, 9, 0)
    assert event.work_type == WorkType.REMOTE
    assert svc.get_event(event.event_id) == event


def test_list_events_range_uses_start_date():
    svc = _svc()
    svc.bulk_create([_event("a", 1, 1), _event("b", 1, 5), _event("c", 2, 10)])

    ids = [e.event_id for e in svc.list_events(start=date(2025, 3, 2), end=date(2025, 3, 10))]
    assert ids == ["b", "c"]
    assert [e.event_id for e in svc.list_events(user_id=1)] == ["a", "b"]


def test_update_and_delete_require_owner_or_admin(admin, member, other_member):
    svc = _svc()
    event = svc.create_event(
        user_id=member.user_id,
        title="Office",
        start_time=datetime(2025, 3, 3, 9, 0),
        end_time=datetime(2025, 3, 3, 18, 0),
        work_type=WorkType.OFFICE,
    )

    with pytest.raises(AuthorizationError):
        svc.update_event(actor=other_member, event_id=event.event_id, changes={"title": "Hijack"})

    updated = svc.update_event(actor=member, event_id=event.event_id, changes={"work_type": "remote", "user_id": 99})
    assert updated.work_type == WorkType.REMOTE
    assert updated.user_id == member.user_id

    with pytest.raises(ValidationError):
        svc.update_event(actor=admin, event_id=event.event_id, changes={"end_time": "2025-03-03T08:00:00"})

    svc.delete_event(actor=admin, event_id=event.event_id)
    with pytest.raises(NotFoundError):
        svc.get_event(event.event_id)


def test_bulk_create_skips_duplicates():
    svc = _svc()
    svc.bulk_create([_event("a", 1, 1)])

    created = svc.bulk_create([_event("x", 1, 1), _event("y", 1, 2), _event("z", 1, 2), _event("w", 1, 2, WorkType.REMOTE)])

    assert created == 2
    assert len(svc.list_events(user_id=1)) == 3
