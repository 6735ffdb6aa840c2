"""Calendar domain: request and result types, service, locator and merge."""

from .context import DispatchContext
from .errors import BackendError, CalendarAssistantError, UnsupportedOperationError, ValidationError
from .locator import EventLocator, Resolution, ResolutionStatus
from .merge import merge_for_update
from .models import CalendarEvent, Candidate, EventDateTime, EventPatch
from .requests import OperationKind, OperationRequest, parse_request, parse_requests
from .service import CalendarService, GoogleCalendarService, google_calendar_factory

__all__ = [
    "DispatchContext",
    "BackendError",
    "CalendarAssistantError",
    "UnsupportedOperationError",
    "ValidationError",
    "EventLocator",
    "Resolution",
    "ResolutionStatus",
    "merge_for_update",
    "CalendarEvent",
    "Candidate",
    "EventDateTime",
    "EventPatch",
    "OperationKind",
    "OperationRequest",
    "parse_request",
    "parse_requests",
    "CalendarService",
    "GoogleCalendarService",
    "google_calendar_factory",
]
