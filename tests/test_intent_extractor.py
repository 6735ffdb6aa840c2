"""Tests for the LLM-backed intent extractor."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from garbi.intent.base import ExtractionContext
from garbi.intent.llm_extractor import LLMIntentExtractor
from garbi.llm.base import BaseLLM, LLMResponse, ToolCall

SCHEMAS = [
    {"name": "findEvents", "description": "Search", "parameters": {"type": "object", "properties": {}}},
    {"name": "deleteEvent", "description": "Delete", "parameters": {"type": "object", "properties": {}}},
]


@pytest.fixture
def context():
    return ExtractionContext(
        current_date="2025-03-10",
        current_time="2025-03-10T09:00:00",
        tomorrow_date="2025-03-11",
        timezone="UTC",
    )


@pytest.fixture
def mock_llm():
    llm = MagicMock(spec=BaseLLM)
    llm.get_model_name = MagicMock(return_value="test-model")
    return llm


@pytest.mark.asyncio
async def test_function_calls_become_requests(mock_llm, context):
    mock_llm.generate = AsyncMock(
        return_value=LLMResponse(
            tool_calls=[
                ToolCall(id="1", name="findEvents", arguments={"q": "standup"}),
                ToolCall(id="2", name="deleteEvent", arguments={}),
            ]
        )
    )
    extractor = LLMIntentExtractor(mock_llm, SCHEMAS)

    requests = await extractor.extract("cancel my standup", context)

    assert requests == [{"q": "standup", "kind": "findEvents"}, {"kind": "deleteEvent"}]
    args, kwargs = mock_llm.generate.call_args
    assert args[0] == "cancel my standup"
    assert kwargs["tools"] == SCHEMAS
    assert "Today: 2025-03-10" in kwargs["system_prompt"]
    assert "TOOLS: findEvents, deleteEvent" in kwargs["system_prompt"]


@pytest.mark.asyncio
async def test_kind_comes_from_function_name(mock_llm, context):
    """A stray 'kind' argument cannot override the called function."""
    mock_llm.generate = AsyncMock(
        return_value=LLMResponse(
            tool_calls=[ToolCall(id="1", name="findEvents", arguments={"kind": "deleteEvent"})]
        )
    )

    requests = await LLMIntentExtractor(mock_llm, SCHEMAS).extract("find", context)

    assert requests == [{"kind": "findEvents"}]


@pytest.mark.asyncio
async def test_plain_text_reply(mock_llm, context):
    mock_llm.generate = AsyncMock(return_value=LLMResponse(text="Hello! I'm Garbi."))

    result = await LLMIntentExtractor(mock_llm, SCHEMAS).extract("hi", context)

    assert result == "Hello! I'm Garbi."


@pytest.mark.asyncio
async def test_empty_reply(mock_llm, context):
    mock_llm.generate = AsyncMock(return_value=LLMResponse())

    assert await LLMIntentExtractor(mock_llm, SCHEMAS).extract("...", context) == ""


@pytest.mark.asyncio
async def test_assistant_name_and_language(mock_llm, context):
    mock_llm.generate = AsyncMock(return_value=LLMResponse(text="Merhaba"))
    extractor = LLMIntentExtractor(mock_llm, SCHEMAS, assistant_name="Takvim", language="tr")

    await extractor.extract("selam", context)

    system_prompt = mock_llm.generate.call_args.kwargs["system_prompt"]
    assert system_prompt.startswith("You are Takvim")
    assert "(tr)" in system_prompt
