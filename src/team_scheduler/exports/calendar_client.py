from __future__ import annotations

from typing import Protocol

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..core.exceptions import IntegrationError

# HttpError covers API responses; the rest are transport failures raised by execute()
GOOGLE_API_ERRORS = (HttpError, GoogleAuthError, httplib2.HttpLib2Error, OSError)


class CalendarGateway(Protocol):
    """Write access to the user's Google Calendar."""

    def create_calendar(self, *, access_token: str, summary: str, description: str, time_zone: str) -> str:
        """Create a secondary calendar and return its id."""
        raise NotImplementedError

    def insert_event(self, *, access_token: str, calendar_id: str, body: dict) -> str:
        raise NotImplementedError


class GoogleCalendarClient(CalendarGateway):
    """Calendar API v3 with a caller-supplied OAuth access token."""

    def _service(self, access_token: str):
        return build("calendar", "v3", credentials=Credentials(token=access_token), cache_discovery=False)

    def create_calendar(self, *, access_token: str, summary: str, description: str, time_zone: str) -> str:
        body = {"summary": summary, "description": description, "timeZone": time_zone}
        try:
            created = self._service(access_token).calendars().insert(body=body).execute()
        except GOOGLE_API_ERRORS as e:
            raise IntegrationError(f"Failed to create Google calendar: {e}")

        calendar_id = created.get("id")
        if not calendar_id:
            raise IntegrationError("Google did not return a calendar id")
        return calendar_id

    def insert_event(self, *, access_token: str, calendar_id: str, body: dict) -> str:
        try:
            created = self._service(access_token).events().insert(calendarId=calendar_id, body=body).execute()
        except GOOGLE_API_ERRORS as e:
            raise IntegrationError(f"Failed to insert calendar event: {e}")
        return created.get("id", "")
