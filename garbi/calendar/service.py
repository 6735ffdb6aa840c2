"""Remote calendar service boundary and its Google Calendar implementation."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .errors import BackendError
from .models import CalendarEvent

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar"]


class CalendarService(ABC):
    """Operations the engine needs from a remote calendar.

    One instance is bound to one caller's credential. Every timestamp
    crossing this boundary is timezone-qualified.
    """

    @abstractmethod
    async def list_events(
        self,
        time_min: str,
        time_max: Optional[str] = None,
        max_results: int = 10,
        query: Optional[str] = None,
    ) -> List[CalendarEvent]:
        """
        List events ordered by start time.

        Args:
            time_min: Lower bound (RFC3339, inclusive)
            time_max: Optional upper bound (RFC3339)
            max_results: Maximum number of events
            query: Optional free-text search handled by the service

        Returns:
            Events ordered by start time ascending
        """

    @abstractmethod
    async def get_event(self, event_id: str) -> CalendarEvent:
        """Fetch one event by id."""

    @abstractmethod
    async def insert_event(self, event: CalendarEvent) -> CalendarEvent:
        """Create an event and return the stored copy."""

    @abstractmethod
    async def update_event(self, event_id: str, event: CalendarEvent) -> CalendarEvent:
        """Replace an event body and return the stored copy."""

    @abstractmethod
    async def delete_event(self, event_id: str) -> None:
        """Delete an event."""


class GoogleCalendarService(CalendarService):
    """Google Calendar v3 client bound to an OAuth access token."""

    def __init__(self, access_token: str, calendar_id: str = "primary"):
        """
        Initialize Google Calendar service.

        Args:
            access_token: OAuth2 access token of the caller (already valid)
            calendar_id: Calendar to operate on
        """
        self.credentials = Credentials(token=access_token, scopes=SCOPES)
        self.calendar_id = calendar_id
        self.service = None

    def _get_service(self):
        """Get or create the Google Calendar API resource."""
        if self.service:
            return self.service

        self.service = build(
            "calendar", "v3", credentials=self.credentials, cache_discovery=False
        )
        return self.service

    async def _execute(self, request: Any, operation: str, failure_message: str) -> Any:
        """Run a prepared API request in a worker thread.

        httplib2 transports are not thread-safe, so each call gets its own.
        """
        http = AuthorizedHttp(self.credentials, http=httplib2.Http())
        try:
            return await asyncio.to_thread(request.execute, http=http)
        except (HttpError, httplib2.HttpLib2Error, GoogleAuthError, OSError) as e:
            logger.error(f"[calendar] {operation} failed: {e}")
            raise BackendError(failure_message, operation) from e

    async def list_events(
        self,
        time_min: str,
        time_max: Optional[str] = None,
        max_results: int = 10,
        query: Optional[str] = None,
    ) -> List[CalendarEvent]:
        params = {
            "calendarId": self.calendar_id,
            "timeMin": time_min,
            "maxResults": max_results,
            "singleEvents": True,
            "orderBy": "startTime",
        }
        if time_max:
            params["timeMax"] = time_max
        if query:
            params["q"] = query

        logger.debug(f"[calendar] events.list {params}")
        request = self._get_service().events().list(**params)
        response = await self._execute(request, "list", "Failed to list events")
        return [CalendarEvent.from_api(item) for item in response.get("items", [])]

    async def get_event(self, event_id: str) -> CalendarEvent:
        request = self._get_service().events().get(
            calendarId=self.calendar_id, eventId=event_id
        )
        response = await self._execute(request, "get", "Failed to fetch event")
        return CalendarEvent.from_api(response)

    async def insert_event(self, event: CalendarEvent) -> CalendarEvent:
        request = self._get_service().events().insert(
            calendarId=self.calendar_id, body=event.to_api()
        )
        response = await self._execute(request, "insert", "Failed to create event")
        return CalendarEvent.from_api(response)

    async def update_event(self, event_id: str, event: CalendarEvent) -> CalendarEvent:
        request = self._get_service().events().update(
            calendarId=self.calendar_id, eventId=event_id, body=event.to_api()
        )
        response = await self._execute(request, "update", "Failed to update event")
        return CalendarEvent.from_api(response)

    async def delete_event(self, event_id: str) -> None:
        request = self._get_service().events().delete(
            calendarId=self.calendar_id, eventId=event_id
        )
        await self._execute(request, "delete", "Failed to delete event")


def google_calendar_factory(calendar_id: str = "primary") -> Callable[[str], CalendarService]:
    """Return a factory building a Google service per access token."""

    def factory(access_token: str) -> CalendarService:
        return GoogleCalendarService(access_token, calendar_id=calendar_id)

    return factory
