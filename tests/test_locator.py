"""Tests for the event locator."""

from datetime import date, datetime
from unittest.mock import AsyncMock
from zoneinfo import ZoneInfo

import pytest

from garbi.calendar.locator import EventLocator, ResolutionStatus
from garbi.calendar.models import CalendarEvent
from garbi.calendar.requests import EventRef

NOW = datetime(2025, 3, 8, 12, 0, 0, tzinfo=ZoneInfo("UTC"))


def event(event_id, summary="Standup"):
    return CalendarEvent(
        id=event_id,
        summary=summary,
        start={"dateTime": "2025-03-10T09:00:00+03:00"},
        end={"dateTime": "2025-03-10T09:15:00+03:00"},
    )


@pytest.fixture
def locator():
    return EventLocator(max_results=50, default_look_ahead_days=30, clock=lambda: NOW)


@pytest.fixture
def service():
    service = AsyncMock()
    service.list_events.return_value = []
    return service


def test_search_window_for_date_covers_whole_day(locator):
    time_min, time_max = locator.search_window(date(2025, 3, 10), timezone="Europe/Istanbul")

    assert time_min == "2025-03-10T00:00:00+03:00"
    assert time_max == "2025-03-10T23:59:59+03:00"


def test_search_window_without_date_looks_ahead(locator):
    time_min, time_max = locator.search_window(None, 7, "UTC")

    assert time_min == "2025-03-08T12:00:00+00:00"
    assert time_max == "2025-03-15T12:00:00+00:00"


def test_search_window_default_look_ahead(locator):
    _, time_max = locator.search_window(timezone="UTC")
    assert time_max == "2025-04-07T12:00:00+00:00"


@pytest.mark.asyncio
async def test_find_candidates_passes_query_and_bounds(locator, service):
    service.list_events.return_value = [event("a")]

    candidates = await locator.find_candidates(
        service, query="standup", date=date(2025, 3, 10), timezone="UTC"
    )

    assert [c.id for c in candidates] == ["a"]
    service.list_events.assert_awaited_once_with(
        time_min="2025-03-10T00:00:00+00:00",
        time_max="2025-03-10T23:59:59+00:00",
        max_results=50,
        query="standup",
    )


@pytest.mark.asyncio
async def test_find_candidates_caps_results(service):
    locator = EventLocator(max_results=2, clock=lambda: NOW)
    service.list_events.return_value = [event("a"), event("b"), event("c")]

    candidates = await locator.find_candidates(service, query="standup")

    assert [c.id for c in candidates] == ["a", "b"]


@pytest.mark.asyncio
async def test_resolve_concrete_ref_skips_search(locator, service):
    resolution = await locator.resolve(service, EventRef(event_id="e1"))

    assert resolution.status == ResolutionStatus.RESOLVED
    assert resolution.event_id == "e1"
    service.list_events.assert_not_awaited()


@pytest.mark.asyncio
async def test_resolve_not_found(locator, service):
    resolution = await locator.resolve(service, EventRef(query="nothing"))

    assert resolution.status == ResolutionStatus.NOT_FOUND
    assert resolution.event_id is None


@pytest.mark.asyncio
async def test_resolve_single_match(locator, service):
    service.list_events.return_value = [event("only")]

    resolution = await locator.resolve(service, EventRef(query="standup"))

    assert resolution.status == ResolutionStatus.RESOLVED
    assert resolution.event_id == "only"


@pytest.mark.asyncio
async def test_resolve_many_matches_is_ambiguous(locator, service):
    service.list_events.return_value = [event("a"), event("b", "Standup (team B)")]

    resolution = await locator.resolve(service, EventRef(query="standup"))

    assert resolution.status == ResolutionStatus.AMBIGUOUS
    assert resolution.event_id is None
    assert [c.id for c in resolution.candidates] == ["a", "b"]
