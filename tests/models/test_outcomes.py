import pytest
from pydantic import ValidationError

from grocy_api.models.outcomes import CalendarText, EmptySuccess, OpaqueSuccess


def test_empty_success_dumps_success_flag():
    assert EmptySuccess().model_dump() == {"success": True}


def test_calendar_text_dumps_single_field():
    assert CalendarText(calendar="BEGIN:VCALENDAR").model_dump() == {
        "calendar": "BEGIN:VCALENDAR"
    }


def test_opaque_success_keeps_the_raw_response_object():
    raw = object()
    outcome = OpaqueSuccess(response=raw)
    assert outcome.success is True
    assert outcome.response is raw


def test_outcomes_are_frozen():
    outcome = CalendarText(calendar="x")
    with pytest.raises(ValidationError):
        outcome.calendar = "y"  # type: ignore[misc]
