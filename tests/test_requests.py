"""Tests for operation request parsing."""

from datetime import date

import pytest

from garbi.calendar.errors import UnsupportedOperationError, ValidationError
from garbi.calendar.requests import (
    CreateEventRequest,
    DeleteEventRequest,
    FindEventsRequest,
    ListEventsRequest,
    UpdateEventRequest,
    ensure_timezone,
    parse_request,
    parse_requests,
)


def test_parse_list_events_defaults():
    """listEvents needs no arguments."""
    request = parse_request({"kind": "listEvents"})

    assert isinstance(request, ListEventsRequest)
    assert request.max_results is None
    assert request.time_min is None


def test_parse_create_event_with_wire_names():
    """camelCase fields from the model map onto the request."""
    request = parse_request(
        {
            "kind": "createEvent",
            "summary": "Dentist",
            "startDateTime": "2025-03-10T09:00:00",
            "endDateTime": "2025-03-10T10:00:00",
            "timeZone": "Europe/Istanbul",
            "colorId": 5,
        }
    )

    assert isinstance(request, CreateEventRequest)
    assert request.start_date_time == "2025-03-10T09:00:00"
    assert request.time_zone == "Europe/Istanbul"
    assert request.color_id == "5"


def test_create_missing_end_is_validation_error():
    """A missing required field names the wire field."""
    with pytest.raises(ValidationError) as exc_info:
        parse_request(
            {"kind": "createEvent", "summary": "Dentist", "startDateTime": "2025-03-10T09:00:00"}
        )

    assert "endDateTime" in str(exc_info.value)
    assert exc_info.value.kind == "createEvent"


def test_create_blank_summary_rejected():
    with pytest.raises(ValidationError):
        parse_request(
            {
                "kind": "createEvent",
                "summary": "   ",
                "startDateTime": "2025-03-10T09:00:00",
                "endDateTime": "2025-03-10T10:00:00",
            }
        )


def test_invalid_datetime_rejected():
    with pytest.raises(ValidationError) as exc_info:
        parse_request({"kind": "updateEvent", "eventId": "e1", "startDateTime": "tomorrow 3pm"})

    assert "startDateTime" in str(exc_info.value)


def test_invalid_timezone_rejected():
    with pytest.raises(ValidationError):
        parse_request({"kind": "updateEvent", "eventId": "e1", "timeZone": "Mars/Olympus"})


def test_invalid_color_rejected():
    with pytest.raises(ValidationError):
        parse_request({"kind": "updateEvent", "eventId": "e1", "colorId": "12"})


def test_update_accepts_empty_color_to_clear_it():
    request = parse_request({"kind": "updateEvent", "eventId": "e1", "colorId": ""})

    assert request.color_id == ""
    patch = request.to_patch()
    assert "color_id" in patch.model_fields_set
    assert patch.color_id == ""


def test_create_rejects_empty_color():
    with pytest.raises(ValidationError):
        parse_request(
            {
                "kind": "createEvent",
                "summary": "Dentist",
                "startDateTime": "2025-03-10T09:00:00",
                "endDateTime": "2025-03-10T10:00:00",
                "colorId": "",
            }
        )


def test_ensure_timezone():
    assert ensure_timezone(None) is None
    assert ensure_timezone("Europe/Istanbul") == "Europe/Istanbul"
    with pytest.raises(ValidationError) as exc_info:
        ensure_timezone("Mars/Olympus")

    assert str(exc_info.value) == "Invalid timeZone: Mars/Olympus"


def test_unknown_kind_is_unsupported():
    with pytest.raises(UnsupportedOperationError) as exc_info:
        parse_request({"kind": "shareCalendar"})

    assert exc_info.value.kind == "shareCalendar"
    assert "shareCalendar" in str(exc_info.value)


def test_missing_kind_is_unsupported():
    with pytest.raises(UnsupportedOperationError):
        parse_request({"summary": "x"})


def test_non_mapping_is_validation_error():
    with pytest.raises(ValidationError):
        parse_request(["listEvents"])


def test_typed_request_passes_through():
    request = DeleteEventRequest(event_id="e1")
    assert parse_request(request) is request


def test_blank_identifiers_become_none():
    """Empty strings from the model do not count as identifiers."""
    request = parse_request({"kind": "deleteEvent", "eventId": "", "q": "  ", "date": ""})

    assert isinstance(request, DeleteEventRequest)
    assert not request.has_event_id()
    assert not request.has_search_criteria()


def test_date_parsed_for_search():
    request = parse_request({"kind": "findEvents", "q": "standup", "date": "2025-03-10"})

    assert isinstance(request, FindEventsRequest)
    assert request.date == date(2025, 3, 10)


def test_event_ref_prefers_id():
    request = UpdateEventRequest(event_id="e1", q="standup")
    ref = request.event_ref()

    assert ref.is_concrete
    assert ref.event_id == "e1"
    assert ref.query is None


def test_event_ref_uses_default_look_ahead():
    request = DeleteEventRequest(q="standup")
    ref = request.event_ref(14)

    assert not ref.is_concrete
    assert ref.query == "standup"
    assert ref.max_look_ahead_days == 14


def test_event_ref_explicit_look_ahead_wins():
    request = parse_request({"kind": "deleteEvent", "q": "standup", "maxLookAheadDays": 7})
    assert request.event_ref(30).max_look_ahead_days == 7


def test_to_patch_only_carries_sent_fields():
    """Fields the model did not send stay out of the patch."""
    request = parse_request(
        {"kind": "updateEvent", "q": "standup", "startDateTime": "2025-03-10T15:00:00"}
    )
    patch = request.to_patch()

    assert patch.model_fields_set == {"start_date_time"}
    assert patch.start_date_time == "2025-03-10T15:00:00"


def test_to_patch_keeps_explicit_none():
    """An explicit null still counts as present."""
    request = parse_request({"kind": "updateEvent", "eventId": "e1", "location": None})
    patch = request.to_patch()

    assert "location" in patch.model_fields_set
    assert patch.location is None


def test_parse_requests_keeps_order():
    requests = parse_requests(
        [
            {"kind": "findEvents", "q": "standup"},
            {"kind": "deleteEvent"},
            {"kind": "listEvents"},
        ]
    )

    assert [r.kind for r in requests] == ["findEvents", "deleteEvent", "listEvents"]


def test_parse_requests_fails_on_first_invalid():
    with pytest.raises(UnsupportedOperationError):
        parse_requests([{"kind": "listEvents"}, {"kind": "bogus"}])
