"""State scoped to one dispatch call."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .models import Candidate
from .service import CalendarService

logger = logging.getLogger(__name__)


@dataclass
class DispatchContext:
    """Per-call context threaded through one dispatch.

    Created fresh for every dispatch call and never shared, so concurrent
    calls cannot see each other's ``last_resolved_id``.
    """

    credential: str
    service: CalendarService
    timezone: Optional[str] = None
    last_resolved_id: Optional[str] = None
    search_candidates: List[Candidate] = field(default_factory=list)
    _resolved_written: bool = field(default=False, repr=False)

    def remember_resolved_id(self, event_id: str) -> None:
        """Cache the id found by a search step. Allowed once per dispatch."""
        if self._resolved_written:
            raise RuntimeError("last_resolved_id was already written in this dispatch")
        self.last_resolved_id = event_id
        self._resolved_written = True
        logger.debug(f"[dispatcher] Cached resolved event id {event_id}")

    def consume_resolved_id(self) -> Optional[str]:
        """Hand the cached id to the step that depends on it, clearing it."""
        event_id, self.last_resolved_id = self.last_resolved_id, None
        return event_id

    def remember_candidates(self, candidates: List[Candidate]) -> None:
        """Keep a search step's matches for a dependent step to offer back."""
        self.search_candidates = list(candidates)
