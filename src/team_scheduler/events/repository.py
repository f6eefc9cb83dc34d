from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Event


class EventRepository(Protocol):
    def list_events(
        self,
        *,
        user_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Event]:
        """Events ordered by start time; the range applies to the start date (inclusive)."""
        raise NotImplementedError

    def get_by_id(self, event_id: str) -> Optional[Event]:
        raise NotImplementedError

    def insert(self, event: Event) -> None:
        raise NotImplementedError

    def update(self, event: Event) -> bool:
        raise NotImplementedError

    def delete(self, event_id: str) -> bool:
        raise NotImplementedError

    def exists(self, event: Event) -> bool:
        """True if an event with the same user, start, end and work type is stored."""
        raise NotImplementedError
