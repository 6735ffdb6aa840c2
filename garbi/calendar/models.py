"""Pydantic models for Google Calendar event bodies."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class EventDateTime(BaseModel):
    """Start or end of an event.

    Timed events carry ``dateTime`` + ``timeZone``; all-day events carry
    ``date`` instead.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    date_time: Optional[str] = Field(default=None, alias="dateTime")
    time_zone: Optional[str] = Field(default=None, alias="timeZone")
    date: Optional[str] = Field(default=None, description="All-day date (YYYY-MM-DD)")

    def display_value(self) -> Optional[str]:
        """Return dateTime, falling back to the all-day date."""
        return self.date_time or self.date


class CalendarEvent(BaseModel):
    """A calendar event as returned by the remote service.

    Fields the engine does not model (attendees, reminders, htmlLink, ...)
    are kept as extras so an update round-trips them unchanged.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[str] = None
    etag: Optional[str] = Field(default=None, description="Concurrency token")
    summary: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    color_id: Optional[str] = Field(default=None, alias="colorId")
    start: Optional[EventDateTime] = None
    end: Optional[EventDateTime] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "CalendarEvent":
        """Build an event from a Calendar API resource dict."""
        return cls.model_validate(data)

    def to_api(self) -> Dict[str, Any]:
        """Serialize to a Calendar API request body."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_candidate(self) -> "Candidate":
        """Project the event down to what a user needs to pick it."""
        return Candidate(
            id=self.id,
            summary=self.summary,
            start=self.start.display_value() if self.start else None,
            end=self.end.display_value() if self.end else None,
        )


class EventPatch(BaseModel):
    """Partial event fields for an update.

    Only fields explicitly set on the instance (``model_fields_set``) take
    part in a merge. ``id`` and ``etag`` are accepted so a stray value from
    the model can be carried around, but a merge never applies them.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    etag: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    color_id: Optional[str] = Field(default=None, alias="colorId")
    start_date_time: Optional[str] = Field(default=None, alias="startDateTime")
    end_date_time: Optional[str] = Field(default=None, alias="endDateTime")
    time_zone: Optional[str] = Field(default=None, alias="timeZone")


class Candidate(BaseModel):
    """Minimal projection of an event surfaced for disambiguation."""

    id: Optional[str] = None
    summary: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
