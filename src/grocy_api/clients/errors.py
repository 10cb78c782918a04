"""Exception types raised by the Grocy client."""
from __future__ import annotations

from typing import Optional

REQUEST_FAILED_PREFIX = "Grocy API request failed"
MISSING_API_KEY_MESSAGE = "API key is required. Use set_api_key() to set it."


class GrocyError(RuntimeError):
    """Base class for every error raised by this package."""


class GrocyValidationError(GrocyError, ValueError):
    """Raised when a caller-supplied argument violates an API constraint."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class MissingAPIKeyError(GrocyError):
    """Raised before any network activity when no API key has been set."""

    def __init__(self, message: str = MISSING_API_KEY_MESSAGE) -> None:
        super().__init__(message)


class GrocyHTTPError(GrocyError):
    """Non-2xx response from Grocy. Always re-raised as a GrocyAPIError."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class GrocyAPIError(GrocyError):
    """Raised when a request to the Grocy API fails for any reason."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"{REQUEST_FAILED_PREFIX}: {message}")
        self.reason = message
        self.status_code = status_code
