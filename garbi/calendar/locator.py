"""Resolve event references that lack an id by searching the calendar."""

import logging
from dataclasses import dataclass, field
from datetime import date as Date
from datetime import datetime, time, timedelta
from enum import Enum
from typing import Callable, List, Optional
from zoneinfo import ZoneInfo

from .models import CalendarEvent
from .requests import DEFAULT_LOOK_AHEAD_DAYS, EventRef
from .service import CalendarService

logger = logging.getLogger(__name__)

SEARCH_MAX_RESULTS = 50


class ResolutionStatus(str, Enum):
    """Outcome of resolving a reference."""

    RESOLVED = "resolved"
    AMBIGUOUS = "ambiguous"
    NOT_FOUND = "not_found"


@dataclass
class Resolution:
    """Result of :meth:`EventLocator.resolve`."""

    status: ResolutionStatus
    event_id: Optional[str] = None
    candidates: List[CalendarEvent] = field(default_factory=list)


def _utc_now() -> datetime:
    return datetime.now(ZoneInfo("UTC"))


class EventLocator:
    """Finds candidate events for a free-text query and/or a date.

    Text matching is left entirely to the remote service's own search.
    """

    def __init__(
        self,
        max_results: int = SEARCH_MAX_RESULTS,
        default_look_ahead_days: int = DEFAULT_LOOK_AHEAD_DAYS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize event locator.

        Args:
            max_results: Upper bound on candidates returned by one search
            default_look_ahead_days: Window used when no date is given
            clock: Returns the current aware datetime (for tests)
        """
        self.max_results = min(max_results, SEARCH_MAX_RESULTS)
        self.default_look_ahead_days = default_look_ahead_days
        self._clock = clock or _utc_now

    def search_window(
        self,
        date: Optional[Date] = None,
        max_look_ahead_days: Optional[int] = None,
        timezone: str = "UTC",
    ) -> tuple:
        """
        Compute the (time_min, time_max) RFC3339 bounds of a search.

        A date covers that whole day in the caller's timezone; without one
        the window runs from now for ``max_look_ahead_days`` days.
        """
        tz = ZoneInfo(timezone or "UTC")
        if date is not None:
            start = datetime.combine(date, time(0, 0, 0), tzinfo=tz)
            end = datetime.combine(date, time(23, 59, 59), tzinfo=tz)
        else:
            days = max_look_ahead_days or self.default_look_ahead_days
            start = self._clock().astimezone(tz)
            end = start + timedelta(days=days)
        return start.isoformat(), end.isoformat()

    async def find_candidates(
        self,
        service: CalendarService,
        query: Optional[str] = None,
        date: Optional[Date] = None,
        max_look_ahead_days: Optional[int] = None,
        timezone: str = "UTC",
    ) -> List[CalendarEvent]:
        """
        Search for events that might be the one the user means.

        Args:
            service: Calendar service bound to the caller's credential
            query: Free-text query
            date: Day to search on
            max_look_ahead_days: Look-ahead window when no date is given
            timezone: Caller's timezone, used for day boundaries

        Returns:
            Candidates ordered by start time, at most ``max_results``
        """
        time_min, time_max = self.search_window(date, max_look_ahead_days, timezone)
        logger.debug(
            f"[locator] Searching q={query!r} between {time_min} and {time_max}"
        )

        events = await service.list_events(
            time_min=time_min,
            time_max=time_max,
            max_results=self.max_results,
            query=query,
        )
        candidates = events[: self.max_results]
        logger.info(f"[locator] {len(candidates)} candidate(s) for q={query!r} date={date}")
        return candidates

    async def resolve(
        self, service: CalendarService, ref: EventRef, timezone: str = "UTC"
    ) -> Resolution:
        """Classify a search as resolved, ambiguous or not found."""
        if ref.is_concrete:
            return Resolution(status=ResolutionStatus.RESOLVED, event_id=ref.event_id)

        candidates = await self.find_candidates(
            service,
            query=ref.query,
            date=ref.date,
            max_look_ahead_days=ref.max_look_ahead_days,
            timezone=timezone,
        )

        if not candidates:
            return Resolution(status=ResolutionStatus.NOT_FOUND)
        if len(candidates) == 1:
            return Resolution(
                status=ResolutionStatus.RESOLVED,
                event_id=candidates[0].id,
                candidates=candidates,
            )
        return Resolution(status=ResolutionStatus.AMBIGUOUS, candidates=candidates)
