"""Shared fixtures: an in-memory calendar service."""

import asyncio
from datetime import datetime
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo

import pytest

from garbi.calendar.errors import BackendError
from garbi.calendar.locator import EventLocator
from garbi.calendar.models import CalendarEvent
from garbi.calendar.service import CalendarService

NOW = datetime(2025, 3, 8, 12, 0, 0, tzinfo=ZoneInfo("UTC"))


class FakeCalendarService(CalendarService):
    """Calendar kept in a dict; records every call made to it.

    ``search_results`` maps a query to the events ``list_events`` returns
    for it. ``delays`` maps a method name to seconds slept before answering.
    ``query_delays`` maps a search query to seconds slept before that search
    is recorded. ``fail_on`` names a method that raises BackendError.
    """

    def __init__(self, events: Optional[List[CalendarEvent]] = None):
        self.events: Dict[str, CalendarEvent] = {e.id: e for e in events or []}
        self.search_results: Dict[Optional[str], List[CalendarEvent]] = {}
        self.delays: Dict[str, float] = {}
        self.query_delays: Dict[Optional[str], float] = {}
        self.fail_on: Optional[str] = None
        self.calls: List[tuple] = []
        self._next_id = 1

    async def _enter(self, name: str, *args) -> None:
        self.calls.append((name,) + args)
        if name in self.delays:
            await asyncio.sleep(self.delays[name])
        if self.fail_on == name:
            raise BackendError(f"Failed to {name}", name)

    def mutations(self) -> List[tuple]:
        return [c for c in self.calls if c[0] in ("insert_event", "update_event", "delete_event")]

    async def list_events(self, time_min, time_max=None, max_results=10, query=None):
        if query in self.query_delays:
            await asyncio.sleep(self.query_delays[query])
        await self._enter("list_events", query)
        if query in self.search_results:
            return list(self.search_results[query])[:max_results]
        return list(self.events.values())[:max_results]

    async def get_event(self, event_id):
        await self._enter("get_event", event_id)
        return self.events[event_id].model_copy(deep=True)

    async def insert_event(self, event):
        await self._enter("insert_event", event)
        created = event.model_copy(update={"id": f"new-{self._next_id}", "etag": '"1"'})
        self._next_id += 1
        self.events[created.id] = created
        return created

    async def update_event(self, event_id, event):
        await self._enter("update_event", event_id, event)
        self.events[event_id] = event
        return event

    async def delete_event(self, event_id):
        await self._enter("delete_event", event_id)
        self.events.pop(event_id, None)


def make_event(event_id: str, summary: str = "Standup", **fields) -> CalendarEvent:
    data = {
        "id": event_id,
        "etag": f'"{event_id}-etag"',
        "summary": summary,
        "start": {"dateTime": "2025-03-10T09:00:00+03:00", "timeZone": "Europe/Istanbul"},
        "end": {"dateTime": "2025-03-10T09:15:00+03:00", "timeZone": "Europe/Istanbul"},
    }
    data.update(fields)
    return CalendarEvent.from_api(data)


@pytest.fixture
def calendar():
    return FakeCalendarService([make_event("evt-1"), make_event("evt-2", "Lunch")])


@pytest.fixture
def locator():
    return EventLocator(max_results=50, default_look_ahead_days=30, clock=lambda: NOW)
