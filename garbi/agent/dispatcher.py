"""Operation dispatcher: runs one batch of operation requests."""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Union

from .aggregator import normalize
from ..calendar.context import DispatchContext
from ..calendar.errors import UnsupportedOperationError, ValidationError
from ..calendar.locator import EventLocator, Resolution, ResolutionStatus
from ..calendar.models import Candidate
from ..calendar.requests import (
    DeleteEventRequest,
    OperationKind,
    OperationRequest,
    UpdateEventRequest,
    ensure_timezone,
    parse_request,
)
from ..calendar.results import (
    DisambiguationResult,
    OperationResult,
    SearchResultsResult,
    TextResult,
)
from ..calendar.service import CalendarService
from ..tools.base import BaseTool
from ..tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


def needs_resolution(request: OperationRequest) -> bool:
    """Update/delete without an explicit event id."""
    return (
        isinstance(request, (UpdateEventRequest, DeleteEventRequest))
        and not request.has_event_id()
    )


@dataclass
class ExecutionPlan:
    """Validated batch plus its ordering constraints.

    ``consumer_index`` is the first identifier-less update/delete that has a
    search before it; ``feeder_index`` is the nearest such search. Every
    search ahead of the consumer runs in one sequential lane that ends with
    the consumer, so the consumer only starts once they have all finished.
    Everything else is independent.
    """

    requests: List[OperationRequest]
    feeder_index: Optional[int] = None
    consumer_index: Optional[int] = None

    def dependent_indexes(self) -> List[int]:
        if self.consumer_index is None:
            return []
        searches = [
            i
            for i in range(self.consumer_index)
            if self.requests[i].kind == OperationKind.FIND.value
        ]
        return searches + [self.consumer_index]

    def independent_indexes(self) -> List[int]:
        dependent = set(self.dependent_indexes())
        return [i for i in range(len(self.requests)) if i not in dependent]


class OperationDispatcher:
    """Executes a batch of operation requests against the calendar.

    Lifecycle of one request:
    RECEIVED -> (RESOLVING) -> RESOLVED | AMBIGUOUS | NOT_FOUND -> EXECUTING
    -> DONE | FAILED. Any raised error fails the whole batch; not-found and
    ambiguous references finish as text/disambiguation results instead.
    """

    def __init__(
        self,
        tool_registry: ToolRegistry,
        locator: EventLocator,
        service_factory: Callable[[str], CalendarService],
    ):
        """Initialize dispatcher.

        Args:
            tool_registry: Tools keyed by operation kind
            locator: Locator used to resolve references without an id
            service_factory: Builds a calendar service for a credential
        """
        self.tool_registry = tool_registry
        self.locator = locator
        self.service_factory = service_factory

    def _tool_for(self, kind: str) -> BaseTool:
        tool = self.tool_registry.get_tool(kind)
        if tool is None:
            raise UnsupportedOperationError(kind)
        return tool

    def plan(
        self, raw_requests: Sequence[Any], timezone: Optional[str] = None
    ) -> ExecutionPlan:
        """
        Validate a batch and work out its ordering.

        Args:
            raw_requests: Typed requests or raw mappings with a ``kind``
            timezone: Caller's default timezone

        Returns:
            ExecutionPlan for the batch

        Raises:
            UnsupportedOperationError: For an unknown operation kind
            ValidationError: For a request that cannot be executed, or an
                unknown caller timezone
        """
        ensure_timezone(timezone)
        requests = [parse_request(raw) for raw in raw_requests]
        plan = ExecutionPlan(requests=requests)

        last_search = None
        for i, request in enumerate(requests):
            if request.kind == OperationKind.FIND.value:
                last_search = i
            elif last_search is not None and needs_resolution(request):
                plan.feeder_index = last_search
                plan.consumer_index = i
                break

        for i, request in enumerate(requests):
            self._tool_for(request.kind).validate_request(request, timezone)
            if (
                needs_resolution(request)
                and i != plan.consumer_index
                and not request.has_search_criteria()
            ):
                raise ValidationError(
                    "Either eventId or search criteria (q/date) must be provided",
                    kind=request.kind,
                )

        return plan

    async def dispatch(
        self,
        requests: Sequence[Any],
        credential: str,
        user_timezone: Optional[str] = None,
    ) -> Union[OperationResult, List[OperationResult]]:
        """
        Run a batch and normalize its results.

        Args:
            requests: Ordered operation requests from one utterance
            credential: Caller's access token
            user_timezone: Caller's default timezone

        Returns:
            A bare result for a single request, otherwise a list in
            request order (empty for an empty batch)
        """
        results = await self.execute_batch(requests, credential, user_timezone)
        return normalize(results)

    async def execute_batch(
        self,
        requests: Sequence[Any],
        credential: str,
        user_timezone: Optional[str] = None,
    ) -> List[OperationResult]:
        """Run a batch and return one result per request, in request order."""
        start_time = time.time()
        plan = self.plan(requests, user_timezone)
        if not plan.requests:
            return []

        logger.info(
            f"[dispatcher] Dispatching {len(plan.requests)} request(s): "
            f"{[r.kind for r in plan.requests]}"
        )
        if plan.feeder_index is not None:
            logger.debug(
                f"[dispatcher] Sequential lane: {plan.dependent_indexes()} "
                f"(feeder #{plan.feeder_index})"
            )

        context = DispatchContext(
            credential=credential,
            service=self.service_factory(credential),
            timezone=user_timezone,
        )
        results: List[Optional[OperationResult]] = [None] * len(plan.requests)

        async def run_one(index: int) -> None:
            results[index] = await self._execute(context, plan, index)

        async def run_sequential(indexes: List[int]) -> None:
            for index in indexes:
                await run_one(index)

        coroutines = [run_one(i) for i in plan.independent_indexes()]
        if plan.dependent_indexes():
            coroutines.append(run_sequential(plan.dependent_indexes()))

        tasks = [asyncio.ensure_future(c) for c in coroutines]
        try:
            await asyncio.gather(*tasks)
        except Exception as e:
            logger.error(f"[dispatcher] Batch aborted: {type(e).__name__}: {e}")
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        processing_time = (time.time() - start_time) * 1000
        logger.info(f"[dispatcher] Completed in {processing_time:.2f}ms")
        return results

    async def _execute(
        self, context: DispatchContext, plan: ExecutionPlan, index: int
    ) -> OperationResult:
        request = plan.requests[index]
        tool = self._tool_for(request.kind)
        logger.debug(f"[dispatcher] #{index} {request.kind}: RECEIVED")

        if needs_resolution(request):
            logger.debug(f"[dispatcher] #{index} {request.kind}: RESOLVING")
            resolution = await self._resolve(
                context, request, is_consumer=(index == plan.consumer_index)
            )
            logger.debug(f"[dispatcher] #{index} {request.kind}: {resolution.status.name}")
            if resolution.status != ResolutionStatus.RESOLVED:
                candidates = [event.to_candidate() for event in resolution.candidates]
                return self._unresolved_result(
                    request, resolution.status, candidates or context.search_candidates
                )
            request = request.model_copy(update={"event_id": resolution.event_id})

        logger.debug(f"[dispatcher] #{index} {request.kind}: EXECUTING")
        try:
            result = await tool.execute(context, request)
        except Exception:
            logger.debug(f"[dispatcher] #{index} {request.kind}: FAILED")
            raise

        if index == plan.feeder_index and isinstance(result, SearchResultsResult):
            context.remember_candidates(result.candidates)
            if len(result.candidates) == 1:
                context.remember_resolved_id(result.candidates[0].id)

        logger.debug(f"[dispatcher] #{index} {request.kind}: DONE ({result.type})")
        return result

    async def _resolve(
        self,
        context: DispatchContext,
        request: Union[UpdateEventRequest, DeleteEventRequest],
        is_consumer: bool,
    ) -> Resolution:
        """Turn an identifier-less reference into one event id, if possible."""
        if is_consumer:
            cached = context.consume_resolved_id()
            if cached:
                return Resolution(status=ResolutionStatus.RESOLVED, event_id=cached)
            if not request.has_search_criteria():
                # Nothing of its own to search with: reuse the search step's outcome
                if len(context.search_candidates) > 1:
                    return Resolution(status=ResolutionStatus.AMBIGUOUS)
                return Resolution(status=ResolutionStatus.NOT_FOUND)

        ref = request.event_ref(self.locator.default_look_ahead_days)
        return await self.locator.resolve(context.service, ref, context.timezone or "UTC")

    @staticmethod
    def _unresolved_result(
        request: Union[UpdateEventRequest, DeleteEventRequest],
        status: ResolutionStatus,
        candidates: List[Candidate],
    ) -> OperationResult:
        action = "update" if isinstance(request, UpdateEventRequest) else "delete"
        if status == ResolutionStatus.AMBIGUOUS:
            return DisambiguationResult(
                message=f"Multiple matching events found. Please choose which to {action}.",
                candidates=list(candidates),
            )
        return TextResult(message=f"No events found matching the criteria to {action}.")
