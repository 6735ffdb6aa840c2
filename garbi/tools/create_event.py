"""Create event tool."""

import logging
from typing import Optional

from .base import BaseTool
from ..calendar.context import DispatchContext
from ..calendar.errors import ValidationError
from ..calendar.models import CalendarEvent, EventDateTime
from ..calendar.requests import CreateEventRequest, OperationKind
from ..calendar.results import EventResult

logger = logging.getLogger(__name__)


class CreateEventTool(BaseTool):
    """Tool for creating events in the calendar."""

    request_model = CreateEventRequest

    def __init__(self):
        super().__init__(
            name=OperationKind.CREATE.value,
            description="Create a new event in the user's primary Google Calendar",
        )

    def validate_request(self, request: CreateEventRequest, timezone: Optional[str]) -> None:
        """A new event needs a timezone from the request or the caller."""
        if not (request.time_zone or timezone):
            raise ValidationError(
                "Missing required fields: timeZone", kind=OperationKind.CREATE.value
            )

    def build_event(
        self, request: CreateEventRequest, default_timezone: Optional[str]
    ) -> CalendarEvent:
        """Build the event body sent to the calendar service."""
        self.validate_request(request, default_timezone)
        timezone = request.time_zone or default_timezone
        return CalendarEvent(
            summary=request.summary,
            description=request.description or "",
            location=request.location or "",
            color_id=request.color_id,
            start=EventDateTime(date_time=request.start_date_time, time_zone=timezone),
            end=EventDateTime(date_time=request.end_date_time, time_zone=timezone),
        )

    async def execute(self, context: DispatchContext, request: CreateEventRequest) -> EventResult:
        event = self.build_event(request, context.timezone)
        logger.debug(f"[createEvent] Creating event: {event.to_api()}")

        created = await context.service.insert_event(event)
        logger.info(f"[createEvent] Created event {created.id}")
        return EventResult(event=created, message="Event created successfully")
