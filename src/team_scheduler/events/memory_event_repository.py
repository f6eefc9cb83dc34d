from __future__ import annotations

from datetime import date
from typing import Dict, Optional, Sequence

from .model import Event
from .repository import EventRepository


class InMemoryEventRepository(EventRepository):
    def __init__(self, events: Sequence[Event] = ()):
        self._events: Dict[str, Event] = {e.event_id: e for e in events}

    def list_events(
        self,
        *,
        user_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Event]:
        out = []
        for e in self._events.values():
            if user_id is not None and e.user_id != int(user_id):
                continue
            d = e.start_time.date()
            if start is not None and d < start:
                continue
            if end is not None and d > end:
                continue
            out.append(e)
        return sorted(out, key=lambda e: e.start_time)

    def get_by_id(self, event_id: str) -> Optional[Event]:
        return self._events.get(event_id)

    def insert(self, event: Event) -> None:
        self._events[event.event_id] = event

    def update(self, event: Event) -> bool:
        if event.event_id not in self._events:
            return False
        self._events[event.event_id] = event
        return True

    def delete(self, event_id: str) -> bool:
        return self._events.pop(event_id, None) is not None

    def exists(self, event: Event) -> bool:
        key = event.duplicate_key()
        return any(e.duplicate_key() == key for e in self._events.values())
