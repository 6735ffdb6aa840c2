"""Intent extraction interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Union
from zoneinfo import ZoneInfo


@dataclass
class ExtractionContext:
    """Date context the extractor needs to resolve relative dates."""

    current_date: str
    current_time: str
    tomorrow_date: str
    timezone: str

    @classmethod
    def build(cls, timezone: str, now: Optional[datetime] = None) -> "ExtractionContext":
        """
        Build the context for a timezone.

        Args:
            timezone: IANA timezone of the caller
            now: Current instant; defaults to the wall clock

        Returns:
            ExtractionContext with dates as YYYY-MM-DD and time as
            YYYY-MM-DDTHH:MM:00, all local to ``timezone``
        """
        tz = ZoneInfo(timezone)
        local = (now or datetime.now(tz)).astimezone(tz)
        return cls(
            current_date=local.strftime("%Y-%m-%d"),
            current_time=local.strftime("%Y-%m-%dT%H:%M:00"),
            tomorrow_date=(local + timedelta(days=1)).strftime("%Y-%m-%d"),
            timezone=timezone,
        )


class IntentExtractor(ABC):
    """Turns a natural-language prompt into operation requests."""

    @abstractmethod
    async def extract(
        self, prompt: str, context: ExtractionContext
    ) -> Union[List[Dict[str, Any]], str]:
        """
        Extract operation requests from a prompt.

        Args:
            prompt: User's utterance
            context: Date context for the caller

        Returns:
            Ordered raw requests (each a mapping with a ``kind``), or the
            model's plain-text reply when no operation was requested
        """
        pass
