"""Find events tool."""

import logging

from .base import BaseTool
from ..calendar.context import DispatchContext
from ..calendar.locator import EventLocator
from ..calendar.requests import FindEventsRequest, OperationKind
from ..calendar.results import SearchResultsResult

logger = logging.getLogger(__name__)


class FindEventsTool(BaseTool):
    """Tool for searching events by free text and/or date."""

    request_model = FindEventsRequest

    def __init__(self, locator: EventLocator):
        """
        Initialize find tool.

        Args:
            locator: Locator performing the search
        """
        super().__init__(
            name=OperationKind.FIND.value,
            description=(
                "Search the user's primary Google Calendar for events by free text "
                "and/or date, e.g. before updating or deleting one"
            ),
        )
        self.locator = locator

    async def execute(
        self, context: DispatchContext, request: FindEventsRequest
    ) -> SearchResultsResult:
        ref = request.event_ref(self.locator.default_look_ahead_days)
        candidates = await self.locator.find_candidates(
            context.service,
            query=ref.query,
            date=ref.date,
            max_look_ahead_days=ref.max_look_ahead_days,
            timezone=context.timezone or "UTC",
        )

        if not candidates:
            message = "No events found matching the criteria."
        elif len(candidates) == 1:
            message = "Found 1 matching event."
        else:
            message = f"Found {len(candidates)} matching events."

        return SearchResultsResult(
            message=message,
            candidates=[event.to_candidate() for event in candidates],
        )
