"""Request-building helpers for the Grocy dispatcher."""
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import quote

import requests

from grocy_api.clients.errors import GrocyAPIError, GrocyHTTPError

API_KEY_HEADER = "GROCY-API-KEY"
API_PATH_SUFFIX = "/api"
BODY_METHODS = frozenset({"POST", "PUT"})

# Failures raised while talking to Grocy or reading its reply
TRANSPORT_ERRORS = (
    requests.RequestException,
    OSError,
    ValueError,
    TypeError,
    GrocyHTTPError,
)

QueryPairs = List[Tuple[str, str]]


def normalize_base_url(base_url: str) -> str:
    """Ensure the base URL ends with exactly one ``/api`` segment."""
    trimmed = base_url.strip().rstrip("/")
    if trimmed.endswith(API_PATH_SUFFIX):
        return trimmed
    return f"{trimmed}{API_PATH_SUFFIX}"


def encode_segment(value: Any) -> str:
    """Percent-encode a single path segment."""
    return quote(str(value), safe="")


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query_pairs(query_params: Optional[Mapping[str, Any]]) -> QueryPairs:
    """
    Flatten query parameters into ordered ``(name, value)`` pairs.

    Lists and tuples expand to one ``name[]`` pair per element, ``None``
    values are dropped, everything else is stringified.
    """
    pairs: QueryPairs = []
    if not query_params:
        return pairs

    for key, value in query_params.items():
        if isinstance(value, (list, tuple)):
            pairs.extend((f"{key}[]", _query_value(item)) for item in value)
        elif value is not None:
            pairs.append((key, _query_value(value)))
    return pairs


def request_failure(exc: BaseException) -> GrocyAPIError:
    """Build the single error type callers see for any failed request."""
    return GrocyAPIError(str(exc), status_code=getattr(exc, "status_code", None))
