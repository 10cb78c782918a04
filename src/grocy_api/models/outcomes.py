"""Pydantic models for the non-JSON outcomes of a Grocy request."""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict


class EmptySuccess(BaseModel):
    """The request succeeded without a body (HTTP 204 or a plain upload)."""

    model_config = ConfigDict(frozen=True)

    success: Literal[True] = True


class CalendarText(BaseModel):
    """iCal text returned by the calendar endpoints."""

    model_config = ConfigDict(frozen=True)

    calendar: str


class OpaqueSuccess(BaseModel):
    """
    A successful response that is neither JSON nor iCal, e.g. a file download.

    ``response`` is the untouched transport response; read ``.content`` or
    ``.iter_content()`` from it directly.
    """

    model_config = ConfigDict(frozen=True)

    success: Literal[True] = True
    response: Any


JsonValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]

Outcome = Union[EmptySuccess, CalendarText, OpaqueSuccess, JsonValue]
