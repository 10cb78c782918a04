"""Argument validators used before anything is sent to Grocy.

Every validator takes the raw value and a human-readable field name, and
either returns the normalized value or raises ``GrocyValidationError`` with a
message naming the field.

Sanitization
------------
Grocy renders names, notes and descriptions back into HTML, so free-text
fields are HTML-escaped by default (``sanitize=True``). Technical values such
as barcodes, entity names, file paths, URLs, API keys and passwords must keep
their exact bytes and are validated with ``sanitize=False``.
"""
from __future__ import annotations

import math
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from grocy_api.clients.errors import GrocyValidationError

DEFAULT_MAX_LENGTH = 255

_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        '"': "&quot;",
        "'": "&#x27;",
        "<": "&lt;",
        ">": "&gt;",
        "/": "&#x2F;",
        "\\": "&#x5C;",
        "`": "&#96;",
    }
)


def escape_html(value: str) -> str:
    """Replace HTML-significant characters with their entities."""
    return value.translate(_HTML_ESCAPES)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid number for Grocy
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_id(value: Any, field_name: str) -> int:
    """Require a strictly positive integer."""
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise GrocyValidationError(field_name, f"{field_name} must be a positive integer")
    return value


def validate_optional_id(value: Any, field_name: str) -> Optional[int]:
    if value is None:
        return None
    return validate_id(value, field_name)


def validate_number(
    value: Any,
    field_name: str,
    *,
    min_value: float = 0,
    max_value: Optional[float] = None,
) -> float:
    """Require a finite number within the inclusive ``[min_value, max_value]`` range."""
    if not _is_number(value) or not math.isfinite(value):
        raise GrocyValidationError(field_name, f"{field_name} must be a valid number")

    if value < min_value:
        raise GrocyValidationError(field_name, f"{field_name} must be at least {min_value}")

    if max_value is not None and value > max_value:
        raise GrocyValidationError(field_name, f"{field_name} must be at most {max_value}")

    return value


def validate_optional_number(
    value: Any,
    field_name: str,
    *,
    min_value: float = 0,
    max_value: Optional[float] = None,
) -> Optional[float]:
    if value is None:
        return None
    return validate_number(value, field_name, min_value=min_value, max_value=max_value)


def validate_string(
    value: Any,
    field_name: str,
    *,
    required: bool = True,
    max_length: int = DEFAULT_MAX_LENGTH,
    min_length: Optional[int] = None,
    sanitize: bool = True,
) -> str:
    """
    Validate a string and optionally HTML-escape it.

    Length limits apply to the trimmed value; the returned string is not
    trimmed. With ``required=False`` an empty or missing value yields ``""``.
    """
    if value is not None and not isinstance(value, str):
        raise GrocyValidationError(field_name, f"{field_name} must be a string")

    if required and (not value or not value.strip()):
        raise GrocyValidationError(
            field_name, f"{field_name} is required and must be non-empty"
        )

    if not value:
        return ""

    trimmed_length = len(value.strip())

    if min_length is not None and trimmed_length < min_length:
        raise GrocyValidationError(
            field_name, f"{field_name} must be at least {min_length} characters"
        )

    if trimmed_length > max_length:
        raise GrocyValidationError(
            field_name, f"{field_name} must not exceed {max_length} characters"
        )

    return escape_html(value) if sanitize else value


def validate_optional_string(
    value: Any,
    field_name: str,
    *,
    max_length: int = DEFAULT_MAX_LENGTH,
    min_length: Optional[int] = None,
    sanitize: bool = True,
) -> Optional[str]:
    if value is None:
        return None
    return validate_string(
        value,
        field_name,
        required=False,
        max_length=max_length,
        min_length=min_length,
        sanitize=sanitize,
    )


def validate_boolean(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise GrocyValidationError(field_name, f"{field_name} must be a boolean")
    return value


def _isoformat_utc(value: datetime) -> str:
    """Render a datetime as UTC ISO 8601 with millisecond precision and a 'Z' suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (
        value.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def validate_date(value: Any, field_name: str) -> str:
    """
    Accept a ``datetime``/``date`` or an ISO 8601 string.

    Datetimes are rendered as UTC ISO strings (naive values are assumed to be
    UTC), dates as ``YYYY-MM-DD``. Valid strings are returned unchanged.

    Strings must be ISO 8601 as accepted by ``datetime.fromisoformat`` on
    Python 3.11+: a date (``2024-01-15`` or ``20240115``), optionally followed
    by ``T`` or a space and a time of any precision (``10``, ``10:00``,
    ``10:00:00.5``), optionally followed by ``Z`` or a UTC offset.
    """
    if value is None or value == "":
        raise GrocyValidationError(field_name, f"{field_name} is required")

    if isinstance(value, datetime):
        return _isoformat_utc(value)

    if isinstance(value, date):
        return value.isoformat()

    if isinstance(value, str):
        try:
            datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise GrocyValidationError(
                field_name, f"{field_name} is not a valid date"
            ) from None
        return value

    raise GrocyValidationError(
        field_name, f"{field_name} must be a date object or date string"
    )


def validate_optional_date(value: Any, field_name: str) -> Optional[str]:
    if value is None or value == "":
        return None
    return validate_date(value, field_name)


def validate_array(
    value: Any,
    field_name: str,
    *,
    required: bool = True,
    item_validator: Optional[Callable[[Any, str], Any]] = None,
) -> Tuple[Any, ...]:
    """
    Require a list or tuple, optionally validating every item.

    ``item_validator`` is called as ``item_validator(item, "<field>[<index>]")``
    so failures point at the offending element.
    """
    if not required and not value:
        return ()

    if not isinstance(value, (list, tuple)):
        raise GrocyValidationError(field_name, f"{field_name} must be an array")

    if item_validator is None:
        return tuple(value)

    return tuple(
        item_validator(item, f"{field_name}[{index}]")
        for index, item in enumerate(value)
    )


def require_mapping(value: Any, label: str) -> Mapping[str, Any]:
    """Structured request bodies must be mappings."""
    if not isinstance(value, Mapping):
        raise GrocyValidationError(label, f"{label} must be a mapping")
    return value


class FieldKind(Enum):
    """The kinds of value a known payload field can hold."""

    ID = "id"
    OPTIONAL_ID = "optional_id"
    NUMBER = "number"
    OPTIONAL_NUMBER = "optional_number"
    STRING = "string"
    OPTIONAL_STRING = "optional_string"
    BOOLEAN = "boolean"
    DATE = "date"
    OPTIONAL_DATE = "optional_date"
    ARRAY = "array"


_FIELD_VALIDATORS: Dict[FieldKind, Callable[..., Any]] = {
    FieldKind.ID: validate_id,
    FieldKind.OPTIONAL_ID: validate_optional_id,
    FieldKind.NUMBER: validate_number,
    FieldKind.OPTIONAL_NUMBER: validate_optional_number,
    FieldKind.STRING: validate_string,
    FieldKind.OPTIONAL_STRING: validate_optional_string,
    FieldKind.BOOLEAN: validate_boolean,
    FieldKind.DATE: validate_date,
    FieldKind.OPTIONAL_DATE: validate_optional_date,
    FieldKind.ARRAY: validate_array,
}


def validate_field(
    kind: FieldKind,
    value: Any,
    field_name: str,
    options: Optional[Mapping[str, Any]] = None,
) -> Any:
    """Validate ``value`` with the validator registered for ``kind``."""
    return _FIELD_VALIDATORS[kind](value, field_name, **dict(options or {}))
