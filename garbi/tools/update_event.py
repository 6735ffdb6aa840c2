"""Update event tool."""

import logging

from .base import BaseTool
from ..calendar.context import DispatchContext
from ..calendar.errors import ValidationError
from ..calendar.merge import merge_for_update
from ..calendar.requests import OperationKind, UpdateEventRequest
from ..calendar.results import EventResult

logger = logging.getLogger(__name__)


class UpdateEventTool(BaseTool):
    """Tool for updating an existing event.

    Expects the request's ``event_id`` to be resolved already; the
    dispatcher performs resolution before calling :meth:`execute`.
    """

    request_model = UpdateEventRequest

    def __init__(self):
        super().__init__(
            name=OperationKind.UPDATE.value,
            description=(
                "Update an existing event in the user's primary Google Calendar. "
                "Identify it by eventId, or by q and/or date when the ID is unknown."
            ),
        )

    async def execute(self, context: DispatchContext, request: UpdateEventRequest) -> EventResult:
        if not request.event_id:
            raise ValidationError(
                "Event ID is required to update event", kind=OperationKind.UPDATE.value
            )

        existing = await context.service.get_event(request.event_id)
        merged = merge_for_update(existing, request.to_patch(), context.timezone)
        logger.debug(f"[updateEvent] Updating event with data: {merged.to_api()}")

        updated = await context.service.update_event(request.event_id, merged)
        logger.info(f"[updateEvent] Updated event {updated.id}")
        return EventResult(event=updated, message="Event updated successfully")
