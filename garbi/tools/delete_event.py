"""Delete event tool."""

import logging

from .base import BaseTool
from ..calendar.context import DispatchContext
from ..calendar.errors import ValidationError
from ..calendar.requests import DeleteEventRequest, OperationKind
from ..calendar.results import SuccessResult

logger = logging.getLogger(__name__)


class DeleteEventTool(BaseTool):
    """Tool for deleting an event once its id is resolved."""

    request_model = DeleteEventRequest

    def __init__(self):
        super().__init__(
            name=OperationKind.DELETE.value,
            description=(
                "Delete an event from the user's primary Google Calendar. "
                "Identify it by eventId, or by q and/or date when the ID is unknown."
            ),
        )

    async def execute(self, context: DispatchContext, request: DeleteEventRequest) -> SuccessResult:
        if not request.event_id:
            raise ValidationError(
                "Event ID is required to delete event", kind=OperationKind.DELETE.value
            )

        await context.service.delete_event(request.event_id)
        logger.info(f"[deleteEvent] Deleted event {request.event_id}")
        return SuccessResult(
            message="Event deleted successfully", deleted_event_id=request.event_id
        )
