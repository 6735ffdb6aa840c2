"""Tests for the calendar assistant."""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock
from zoneinfo import ZoneInfo

import pytest

from garbi.agent.assistant import CalendarAssistant
from garbi.agent.dispatcher import OperationDispatcher
from garbi.calendar.errors import ValidationError
from garbi.calendar.results import SuccessResult, TextResult
from garbi.config.config_schema import AppConfig, CalendarConfig
from garbi.intent.base import IntentExtractor
from garbi.main import build_assistant
from garbi.tools.registry import ToolRegistry

NOW = datetime(2025, 3, 10, 7, 0, tzinfo=ZoneInfo("UTC"))


@pytest.fixture
def extractor():
    extractor = MagicMock(spec=IntentExtractor)
    extractor.extract = AsyncMock()
    return extractor


@pytest.fixture
def dispatcher(locator, calendar):
    registry = ToolRegistry()
    registry.initialize_tools(CalendarConfig(), locator)
    return OperationDispatcher(registry, locator, lambda credential: calendar)


@pytest.mark.asyncio
async def test_text_reply(extractor, dispatcher, calendar):
    extractor.extract.return_value = "Hi! How can I help with your calendar?"
    assistant = CalendarAssistant(extractor, dispatcher)

    result = await assistant.handle_prompt("hello", "token")

    assert isinstance(result, TextResult)
    assert result.message == "Hi! How can I help with your calendar?"
    assert calendar.calls == []


@pytest.mark.asyncio
async def test_requests_dispatched(extractor, dispatcher, calendar):
    extractor.extract.return_value = [{"kind": "deleteEvent", "eventId": "evt-1"}]
    assistant = CalendarAssistant(extractor, dispatcher)

    result = await assistant.handle_prompt("delete evt-1", "token")

    assert isinstance(result, SuccessResult)
    assert result.deleted_event_id == "evt-1"


@pytest.mark.asyncio
async def test_no_requests_gives_empty_list(extractor, dispatcher):
    extractor.extract.return_value = []

    assert await CalendarAssistant(extractor, dispatcher).handle_prompt("?", "token") == []


@pytest.mark.asyncio
async def test_timezone_and_clock_reach_extractor(extractor, dispatcher):
    extractor.extract.return_value = "ok"
    assistant = CalendarAssistant(
        extractor, dispatcher, default_timezone="Europe/Istanbul", clock=lambda: NOW
    )

    await assistant.handle_prompt("hi", "token")
    context = extractor.extract.call_args.args[1]
    assert context.timezone == "Europe/Istanbul"
    assert context.current_time == "2025-03-10T10:00:00"

    await assistant.handle_prompt("hi", "token", timezone="America/New_York")
    assert extractor.extract.call_args.args[1].timezone == "America/New_York"


@pytest.mark.asyncio
async def test_caller_timezone_used_for_create(extractor, dispatcher):
    extractor.extract.return_value = [
        {
            "kind": "createEvent",
            "summary": "Dentist",
            "startDateTime": "2025-03-10T09:00:00",
            "endDateTime": "2025-03-10T10:00:00",
        }
    ]
    assistant = CalendarAssistant(extractor, dispatcher)

    result = await assistant.handle_prompt("dentist at 9", "token", timezone="Asia/Tokyo")

    assert result.event.start.time_zone == "Asia/Tokyo"


@pytest.mark.asyncio
async def test_invalid_timezone(extractor, dispatcher):
    assistant = CalendarAssistant(extractor, dispatcher)

    with pytest.raises(ValidationError, match="Invalid timeZone"):
        await assistant.handle_prompt("hi", "token", timezone="Moon/Base")

    extractor.extract.assert_not_called()


def test_build_assistant_from_config():
    config = AppConfig(
        llm={"provider": "ollama", "ollama": {"model": "llama3.1"}},
        agent={"preferences": {"timezone": "Europe/Istanbul", "language": "tr"}},
    )
    llm = MagicMock()

    assistant = build_assistant(config, llm)

    assert assistant.default_timezone == "Europe/Istanbul"
    assert assistant.extractor.language == "tr"
    assert assistant.extractor.llm is llm
    assert [s["name"] for s in assistant.extractor.tool_schemas] == [
        "listEvents",
        "createEvent",
        "updateEvent",
        "deleteEvent",
        "findEvents",
    ]
