"""Calendar assistant: prompt in, calendar results out."""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Union

from .dispatcher import OperationDispatcher
from ..calendar.requests import ensure_timezone
from ..calendar.results import OperationResult, TextResult
from ..intent.base import ExtractionContext, IntentExtractor

logger = logging.getLogger(__name__)


class CalendarAssistant:
    """Runs one user prompt through intent extraction and dispatch."""

    def __init__(
        self,
        extractor: IntentExtractor,
        dispatcher: OperationDispatcher,
        default_timezone: str = "UTC",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize assistant.

        Args:
            extractor: Intent extractor
            dispatcher: Operation dispatcher
            default_timezone: Timezone used when the caller sends none
            clock: Returns the current time; defaults to the wall clock
        """
        self.extractor = extractor
        self.dispatcher = dispatcher
        self.default_timezone = default_timezone
        self.clock = clock

    async def handle_prompt(
        self,
        prompt: str,
        credential: str,
        timezone: Optional[str] = None,
    ) -> Union[OperationResult, List[OperationResult]]:
        """
        Handle one user prompt.

        Args:
            prompt: User's utterance
            credential: Caller's calendar access token
            timezone: Caller's IANA timezone

        Returns:
            A text result when the model answered in prose, otherwise the
            normalized dispatch result

        Raises:
            ValidationError: If the timezone is unknown or a request is invalid
            UnsupportedOperationError: If the model asked for an unknown operation
            BackendError: If a calendar call failed
        """
        timezone = timezone or self.default_timezone
        ensure_timezone(timezone)

        now = self.clock() if self.clock else None
        context = ExtractionContext.build(timezone, now)
        logger.info(f"[assistant] Handling prompt (timezone: {timezone})")

        extracted = await self.extractor.extract(prompt, context)
        if isinstance(extracted, str):
            return TextResult(message=extracted)

        return await self.dispatcher.dispatch(extracted, credential, user_timezone=timezone)
