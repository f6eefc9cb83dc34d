from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from ..common.datetime_utils import parse_iso_datetime
from ..common.permissions import require_owner_or_admin
from ..common.validators import optional_text, require_enum, require_non_empty
from ..core.enums import WorkType
from ..core.exceptions import NotFoundError, ValidationError
from ..logging_config import get_logger
from .model import Event
from .repository import EventRepository

logger = get_logger(__name__)

_UPDATABLE_FIELDS = ("title", "description", "start_time", "end_time", "work_type")


def _validated(event: Event) -> Event:
    title = require_non_empty(event.title, "Title")
    work_type = require_enum(event.work_type, WorkType, "work_type")
    start_time = parse_iso_datetime(event.start_time)
    end_time = parse_iso_datetime(event.end_time)
    if end_time < start_time:
        raise ValidationError("End time must not be earlier than start time")
    return replace(
        event,
        title=title,
        description=optional_text(event.description),
        start_time=start_time,
        end_time=end_time,
        work_type=work_type,
    )


class EventService:
    def __init__(self, events: EventRepository):
        self._events = events

    def list_events(
        self,
        *,
        user_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[Event]:
        if start and end and end < start:
            raise ValidationError("End date must not be earlier than start date")
        return list(self._events.list_events(user_id=user_id, start=start, end=end))

    def get_event(self, event_id: str) -> Event:
        event = self._events.get_by_id(event_id)
        if not event:
            raise NotFoundError("Event not found")
        return event

    def create_event(
        self,
        *,
        user_id: int,
        title: str,
        start_time: datetime | str,
        end_time: datetime | str,
        work_type: WorkType | str,
        description: Optional[str] = None,
    ) -> Event:
        event = _validated(
            Event(
                event_id=str(uuid.uuid4()),
                user_id=int(user_id),
                title=title,
                start_time=start_time,
                end_time=end_time,
                work_type=work_type,
                description=description,
            )
        )
        self._events.insert(event)
        return event

    def update_event(self, *, actor, event_id: str, changes: Dict[str, Any]) -> Event:
        current = self.get_event(event_id)
        require_owner_or_admin(actor, current.user_id)

        updates = {k: v for k, v in changes.items() if k in _UPDATABLE_FIELDS}
        event = _validated(replace(current, **updates))
        self._events.update(event)
        return event

    def delete_event(self, *, actor, event_id: str) -> None:
        current = self.get_event(event_id)
        require_owner_or_admin(actor, current.user_id)
        self._events.delete(event_id)

    def bulk_create(self, events: Iterable[Event]) -> int:
        """Insert events, skipping any whose (user, start, end, work type) is already stored.

        Returns the number of events created.
        """
        created = 0
        seen = set()
        for candidate in events:
            event = _validated(candidate)
            key = event.duplicate_key()
            if key in seen or self._events.exists(event):
                continue
            seen.add(key)
            self._events.insert(event)
            created += 1

        logger.info("Bulk event insert", created=created)
        return created
