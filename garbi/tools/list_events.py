"""List events tool."""

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from .base import BaseTool
from ..calendar.context import DispatchContext
from ..calendar.requests import ListEventsRequest, OperationKind
from ..calendar.results import EventsResult

logger = logging.getLogger(__name__)


class ListEventsTool(BaseTool):
    """Tool for listing upcoming events from the calendar."""

    request_model = ListEventsRequest

    def __init__(self, default_max_results: int = 10):
        """
        Initialize list tool.

        Args:
            default_max_results: Cap used when the request does not set one
        """
        super().__init__(
            name=OperationKind.LIST.value,
            description="List upcoming events from the user's primary Google Calendar",
        )
        self.default_max_results = default_max_results

    async def execute(self, context: DispatchContext, request: ListEventsRequest) -> EventsResult:
        time_min = request.time_min or datetime.now(ZoneInfo("UTC")).isoformat()
        max_results = request.max_results or self.default_max_results

        events = await context.service.list_events(
            time_min=time_min,
            time_max=request.time_max,
            max_results=max_results,
        )
        logger.info(f"[listEvents] Retrieved {len(events)} event(s)")
        return EventsResult(events=events)
