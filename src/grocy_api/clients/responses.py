"""Turn raw Grocy HTTP responses into a single outcome shape."""
from __future__ import annotations

from typing import Any, Optional

from grocy_api.clients.errors import GrocyHTTPError
from grocy_api.models.outcomes import CalendarText, EmptySuccess, OpaqueSuccess, Outcome

JSON_CONTENT_TYPE = "application/json"
CALENDAR_CONTENT_TYPE = "text/calendar"


def is_success(status_code: int) -> bool:
    """Only 2xx counts as success (requests' ``Response.ok`` also accepts 3xx)."""
    return 200 <= status_code < 300


def http_error_message(status_code: int) -> str:
    return f"HTTP error! status: {status_code}"


def error_message_from_payload(payload: Any, status_code: int) -> str:
    """Prefer Grocy's ``error_message`` field, fall back to the status code."""
    if isinstance(payload, dict) and payload.get("error_message"):
        return str(payload["error_message"])
    return http_error_message(status_code)


def normalize_response(response: Any) -> Outcome:
    """
    Map a transport response onto one outcome.

    Precedence:

    1. 204 -> ``EmptySuccess`` whatever the content type says.
    2. JSON -> parsed payload, or ``GrocyHTTPError`` for non-2xx statuses.
    3. iCal -> ``CalendarText``, independent of the status.
    4. anything else -> ``OpaqueSuccess`` on 2xx, ``GrocyHTTPError`` otherwise.

    JSON decode errors propagate as ``ValueError``.
    """
    status_code: int = response.status_code
    if status_code == 204:
        return EmptySuccess()

    content_type: Optional[str] = response.headers.get("content-type")
    if content_type and JSON_CONTENT_TYPE in content_type:
        payload = response.json()
        if not is_success(status_code):
            raise GrocyHTTPError(
                status_code, error_message_from_payload(payload, status_code)
            )
        return payload

    if content_type and CALENDAR_CONTENT_TYPE in content_type:
        return CalendarText(calendar=response.text)

    if is_success(status_code):
        return OpaqueSuccess(response=response)

    raise GrocyHTTPError(status_code, http_error_message(status_code))
