"""Tests for result normalization and serialization."""

from garbi.agent.aggregator import normalize, to_payload
from garbi.calendar.models import CalendarEvent, Candidate
from garbi.calendar.results import (
    DisambiguationResult,
    EventResult,
    EventsResult,
    SearchResultsResult,
    SuccessResult,
    TextResult,
)


def test_normalize_empty():
    assert normalize([]) == []


def test_normalize_single_is_unwrapped():
    result = TextResult(message="Hi")
    assert normalize([result]) is result


def test_normalize_keeps_order_and_duplicates():
    first = TextResult(message="a")
    second = TextResult(message="a")
    third = SuccessResult(message="done")

    assert normalize([first, second, third]) == [first, second, third]


def test_normalize_accepts_tuples():
    results = (TextResult(message="a"), TextResult(message="b"))
    assert normalize(results) == list(results)


def test_payload_single():
    assert to_payload(TextResult(message="Hello!")) == {"type": "text", "message": "Hello!"}


def test_payload_list():
    payload = to_payload([SuccessResult(message="Event deleted successfully"), TextResult(message="x")])

    assert payload == [
        {"type": "success", "message": "Event deleted successfully"},
        {"type": "text", "message": "x"},
    ]


def test_event_payloads_use_wire_names():
    event = CalendarEvent(
        id="e1",
        summary="Standup",
        color_id="4",
        start={"date_time": "2025-03-10T09:00:00", "time_zone": "UTC"},
    )

    assert EventResult(event=event, message="Event created successfully").to_dict() == {
        "type": "event",
        "event": {
            "id": "e1",
            "summary": "Standup",
            "colorId": "4",
            "start": {"dateTime": "2025-03-10T09:00:00", "timeZone": "UTC"},
        },
        "message": "Event created successfully",
    }
    assert EventsResult(events=[event]).to_dict()["events"][0]["id"] == "e1"


def test_candidate_payloads():
    candidates = [Candidate(id="a", summary="A", start="s", end="e")]

    disambiguation = DisambiguationResult(message="pick", candidates=candidates).to_dict()
    search = SearchResultsResult(message="found", candidates=candidates).to_dict()

    assert disambiguation["type"] == "disambiguation"
    assert search["type"] == "searchResults"
    assert disambiguation["candidates"] == [{"id": "a", "summary": "A", "start": "s", "end": "e"}]


def test_all_day_candidate_falls_back_to_date():
    event = CalendarEvent(id="h", summary="Holiday", start={"date": "2025-04-01"})

    candidate = event.to_candidate()

    assert candidate.start == "2025-04-01"
    assert candidate.end is None
