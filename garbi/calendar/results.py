"""Per-operation results returned to the caller."""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Union

from .models import CalendarEvent, Candidate


@dataclass
class EventResult:
    """A single created or updated event."""

    type: ClassVar[str] = "event"

    event: CalendarEvent
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "event": self.event.to_api(), "message": self.message}


@dataclass
class EventsResult:
    """Raw list of events for display."""

    type: ClassVar[str] = "events"

    events: List[CalendarEvent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "events": [e.to_api() for e in self.events]}


@dataclass
class SuccessResult:
    """Operation finished without returning an event (deletes)."""

    type: ClassVar[str] = "success"

    message: str
    deleted_event_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type, "message": self.message}
        if self.deleted_event_id is not None:
            data["deletedEventId"] = self.deleted_event_id
        return data


@dataclass
class TextResult:
    """Plain message: small talk, not-found, soft validation failures."""

    type: ClassVar[str] = "text"

    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "message": self.message}


@dataclass
class DisambiguationResult:
    """Several events matched; the user has to pick one."""

    type: ClassVar[str] = "disambiguation"

    message: str
    candidates: List[Candidate] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "message": self.message,
            "candidates": [c.model_dump() for c in self.candidates],
        }


@dataclass
class SearchResultsResult:
    """Matches of an explicit search."""

    type: ClassVar[str] = "searchResults"

    message: str
    candidates: List[Candidate] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "message": self.message,
            "candidates": [c.model_dump() for c in self.candidates],
        }


OperationResult = Union[
    EventResult,
    EventsResult,
    SuccessResult,
    TextResult,
    DisambiguationResult,
    SearchResultsResult,
]
