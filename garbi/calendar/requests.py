"""Operation requests emitted by the intent extractor.

Requests form a closed tagged union discriminated by ``kind``. Raw payloads
coming from a model are turned into typed requests by :func:`parse_request`,
which is the only place provider output is trusted.
"""

from dataclasses import dataclass
from datetime import date as Date
from datetime import datetime
from enum import Enum
from typing import Any, Annotated, List, Literal, Mapping, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import UnsupportedOperationError, ValidationError
from .models import EventPatch

DEFAULT_LOOK_AHEAD_DAYS = 30

COLOR_IDS = [str(i) for i in range(1, 12)]


class OperationKind(str, Enum):
    """Operation kinds, named after the functions the model calls."""

    LIST = "listEvents"
    CREATE = "createEvent"
    UPDATE = "updateEvent"
    DELETE = "deleteEvent"
    FIND = "findEvents"


def _check_datetime(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ValueError(
            f"'{value}' is not an ISO 8601 datetime (YYYY-MM-DDTHH:mm:ss)"
        )
    return value


def _check_timezone(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"'{value}' is not a valid IANA timezone")
    return value


def _check_color(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = str(value).strip()
    if value not in COLOR_IDS:
        raise ValueError(f"colorId must be one of 1-11, got '{value}'")
    return value


def _check_color_or_clear(value: Optional[str]) -> Optional[str]:
    if isinstance(value, str) and not value.strip():
        return ""
    return _check_color(value)


def ensure_timezone(timezone: Optional[str]) -> Optional[str]:
    """Reject an unknown caller timezone with a ValidationError."""
    if timezone is None:
        return None
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(f"Invalid timeZone: {timezone}") from e
    return timezone


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


@dataclass(frozen=True)
class EventRef:
    """How an update or delete identifies its target event.

    Either ``event_id`` is set, or the query/date descriptor is used to
    search for candidates.
    """

    event_id: Optional[str] = None
    query: Optional[str] = None
    date: Optional[Date] = None
    max_look_ahead_days: int = DEFAULT_LOOK_AHEAD_DAYS

    @property
    def is_concrete(self) -> bool:
        return self.event_id is not None


class _RequestBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ListEventsRequest(_RequestBase):
    """List upcoming events."""

    kind: Literal["listEvents"] = "listEvents"
    max_results: Optional[int] = Field(
        default=None,
        ge=1,
        le=250,
        alias="maxResults",
        description="Maximum number of events to retrieve (default: 10)",
    )
    time_min: Optional[str] = Field(
        default=None,
        alias="timeMin",
        description="RFC3339 timestamp to list events starting from (inclusive, default: now)",
    )
    time_max: Optional[str] = Field(
        default=None,
        alias="timeMax",
        description="RFC3339 timestamp to list events up to (inclusive)",
    )

    @field_validator("time_min", "time_max")
    @classmethod
    def validate_bounds(cls, v: Optional[str]) -> Optional[str]:
        return _check_datetime(v)


class CreateEventRequest(_RequestBase):
    """Create a new event."""

    kind: Literal["createEvent"] = "createEvent"
    summary: str = Field(..., description="Event title/summary")
    description: Optional[str] = Field(default=None, description="Event description")
    location: Optional[str] = Field(default=None, description="Event location")
    color_id: Optional[str] = Field(
        default=None,
        alias="colorId",
        description='Color ID for the event (Google Calendar color IDs range from "1" to "11")',
    )
    start_date_time: str = Field(
        ...,
        alias="startDateTime",
        description="Start date and time in ISO 8601 format (YYYY-MM-DDTHH:mm:ss)",
    )
    end_date_time: str = Field(
        ...,
        alias="endDateTime",
        description="End date and time in ISO 8601 format (YYYY-MM-DDTHH:mm:ss)",
    )
    time_zone: Optional[str] = Field(
        default=None,
        alias="timeZone",
        description="IANA time zone identifier (e.g., America/New_York, Europe/London)",
    )

    @field_validator("summary")
    @classmethod
    def validate_summary(cls, v: str) -> str:
        """Reject blank titles."""
        if not v or not v.strip():
            raise ValueError("summary must not be empty")
        return v.strip()

    @field_validator("start_date_time", "end_date_time")
    @classmethod
    def validate_times(cls, v: Optional[str]) -> Optional[str]:
        return _check_datetime(v)

    @field_validator("time_zone")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        return _check_timezone(v)

    @field_validator("color_id", mode="before")
    @classmethod
    def validate_color(cls, v: Any) -> Optional[str]:
        return _check_color(v)


class _IdentifiedRequest(_RequestBase):
    """Shared identification fields for update and delete."""

    event_id: Optional[str] = Field(
        default=None, alias="eventId", description="ID of the event"
    )
    q: Optional[str] = Field(
        default=None,
        description="Free-text search to find the event when the ID is unknown "
        "(summary, description, location, attendees)",
    )
    date: Optional[Date] = Field(
        default=None, description="Date of the event (YYYY-MM-DD) to narrow the search"
    )
    max_look_ahead_days: Optional[int] = Field(
        default=None,
        ge=1,
        le=365,
        alias="maxLookAheadDays",
        description="How many days ahead to search when no date is given (default: 30)",
    )

    @field_validator("event_id", "q", "date", mode="before")
    @classmethod
    def strip_identifiers(cls, v: Any) -> Any:
        return _blank_to_none(v)

    def has_event_id(self) -> bool:
        return self.event_id is not None

    def has_search_criteria(self) -> bool:
        return self.q is not None or self.date is not None

    def event_ref(self, default_look_ahead_days: int = DEFAULT_LOOK_AHEAD_DAYS) -> EventRef:
        """Build the reference used to find the target event."""
        if self.event_id is not None:
            return EventRef(event_id=self.event_id)
        return EventRef(
            query=self.q,
            date=self.date,
            max_look_ahead_days=self.max_look_ahead_days or default_look_ahead_days,
        )


class UpdateEventRequest(_IdentifiedRequest):
    """Update fields of an existing event."""

    kind: Literal["updateEvent"] = "updateEvent"
    summary: Optional[str] = Field(default=None, description="Updated event title/summary")
    description: Optional[str] = Field(default=None, description="Updated event description")
    location: Optional[str] = Field(default=None, description="Updated event location")
    color_id: Optional[str] = Field(
        default=None, alias="colorId", description="Updated color ID (1-11), or empty to clear it"
    )
    start_date_time: Optional[str] = Field(
        default=None,
        alias="startDateTime",
        description="Updated start date and time in ISO 8601 format (YYYY-MM-DDTHH:mm:ss)",
    )
    end_date_time: Optional[str] = Field(
        default=None,
        alias="endDateTime",
        description="Updated end date and time in ISO 8601 format (YYYY-MM-DDTHH:mm:ss)",
    )
    time_zone: Optional[str] = Field(
        default=None,
        alias="timeZone",
        description="IANA time zone identifier (e.g., America/New_York, Europe/London)",
    )

    @field_validator("start_date_time", "end_date_time")
    @classmethod
    def validate_times(cls, v: Optional[str]) -> Optional[str]:
        return _check_datetime(v)

    @field_validator("time_zone")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        return _check_timezone(v)

    @field_validator("color_id", mode="before")
    @classmethod
    def validate_color(cls, v: Any) -> Optional[str]:
        # "" clears the color back to the calendar default
        return _check_color_or_clear(v)

    def to_patch(self) -> EventPatch:
        """Return only the event fields the model explicitly sent."""
        fields = set(EventPatch.model_fields) & self.model_fields_set
        return EventPatch(**{name: getattr(self, name) for name in fields})


class DeleteEventRequest(_IdentifiedRequest):
    """Delete an event."""

    kind: Literal["deleteEvent"] = "deleteEvent"


class FindEventsRequest(_RequestBase):
    """Search for events by text and/or date."""

    kind: Literal["findEvents"] = "findEvents"
    q: Optional[str] = Field(
        default=None,
        description="Free-text search (summary, description, location, attendees)",
    )
    date: Optional[Date] = Field(
        default=None, description="Date of the event (YYYY-MM-DD)"
    )
    max_look_ahead_days: Optional[int] = Field(
        default=None,
        ge=1,
        le=365,
        alias="maxLookAheadDays",
        description="How many days ahead to search when no date is given (default: 30)",
    )

    @field_validator("q", "date", mode="before")
    @classmethod
    def strip_criteria(cls, v: Any) -> Any:
        return _blank_to_none(v)

    def event_ref(self, default_look_ahead_days: int = DEFAULT_LOOK_AHEAD_DAYS) -> EventRef:
        return EventRef(
            query=self.q,
            date=self.date,
            max_look_ahead_days=self.max_look_ahead_days or default_look_ahead_days,
        )


OperationRequest = Annotated[
    Union[
        ListEventsRequest,
        CreateEventRequest,
        UpdateEventRequest,
        DeleteEventRequest,
        FindEventsRequest,
    ],
    Field(discriminator="kind"),
]

REQUEST_MODELS = {
    OperationKind.LIST.value: ListEventsRequest,
    OperationKind.CREATE.value: CreateEventRequest,
    OperationKind.UPDATE.value: UpdateEventRequest,
    OperationKind.DELETE.value: DeleteEventRequest,
    OperationKind.FIND.value: FindEventsRequest,
}

_request_adapter = TypeAdapter(OperationRequest)


def _describe_errors(exc: PydanticValidationError, kind: str) -> str:
    """Turn pydantic errors into one short message naming the wire fields."""

    def field_name(error: Mapping[str, Any]) -> Optional[str]:
        loc = [part for part in error.get("loc", ()) if part != kind]
        return str(loc[-1]) if loc else None

    errors = exc.errors()
    missing = [field_name(e) for e in errors if e.get("type") == "missing"]
    if missing:
        return f"Missing required fields: {', '.join(n for n in missing if n)}"

    first = errors[0]
    name = field_name(first)
    message = first.get("msg", "invalid value")
    return f"Invalid {name}: {message}" if name else message


def parse_request(raw: Any) -> OperationRequest:
    """
    Validate one operation request.

    Args:
        raw: A typed request model, or a mapping with a ``kind`` key and
            camelCase fields as emitted by the model

    Returns:
        Typed request model

    Raises:
        UnsupportedOperationError: If ``kind`` is not a known operation
        ValidationError: If required fields are missing or malformed
    """
    if isinstance(raw, tuple(REQUEST_MODELS.values())):
        return raw

    if not isinstance(raw, Mapping):
        raise ValidationError(
            f"Operation request must be an object, got {type(raw).__name__}"
        )

    kind = raw.get("kind")
    if not isinstance(kind, str) or kind not in REQUEST_MODELS:
        raise UnsupportedOperationError(kind)

    try:
        return _request_adapter.validate_python(dict(raw))
    except PydanticValidationError as e:
        raise ValidationError(_describe_errors(e, kind), kind=kind) from e


def parse_requests(raw_requests: List[Any]) -> List[OperationRequest]:
    """Validate a whole batch, failing on the first invalid request."""
    return [parse_request(raw) for raw in raw_requests]
