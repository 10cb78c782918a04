"""Shared test doubles for the Grocy client tests.

The client only needs a session exposing ``headers`` and
``request(method, url, **kwargs)``, and responses exposing ``status_code``,
``headers``, ``json()`` and ``text``. The doubles below record every call so
tests can assert on the outgoing request without any network access.

Classes:
    _NullHandler: No-op logging handler for silencing loggers during tests.
    DummyResponse: Canned transport response.
    DummySession: Session stub that records requests and replays responses.

Fixtures:
    make_response: The DummyResponse class, as a factory.
    make_session: Factory building a DummySession from queued outcomes.
    dummy_session: Session stub answering ``{}`` with HTTP 200.
    client: GrocyClient wired to ``dummy_session`` with an API key set.
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pytest

from grocy_api.clients.grocy_client import GrocyClient

BASE_URL = "https://grocy.example.com"
API_KEY = "test-api-key"


class _NullHandler(logging.Handler):
    """Configure logging so tests don't try writing to pytest's closed streams."""

    def emit(self, record):  # pragma: no cover
        """Ignore log records to keep test output clean."""
        pass


_null_handler = _NullHandler()
root_logger = logging.getLogger()
root_logger.setLevel(logging.INFO)
root_logger.handlers = [_null_handler]

logging.getLogger("urllib3").setLevel(logging.WARNING)


# ---------------------------------------------------------------------------
# Transport doubles
# ---------------------------------------------------------------------------

_MISSING = object()


class DummyResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(
        self,
        status_code: int = 200,
        payload: Any = _MISSING,
        *,
        content_type: Optional[str] = "application/json",
        text: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.headers: Dict[str, str] = {}
        if content_type is not None:
            self.headers["content-type"] = content_type
        self._payload = payload
        if text is None and payload is not _MISSING:
            text = json.dumps(payload)
        self.text = text or ""
        self.json_calls = 0

    def json(self):
        self.json_calls += 1
        if self._payload is _MISSING:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


@dataclass
class DummySession:
    """Records requests and answers with queued responses (last one repeats)."""

    responses: List[Any] = field(default_factory=lambda: [DummyResponse(200, {})])
    headers: Dict[str, str] = field(default_factory=dict)
    calls: List[Dict[str, Any]] = field(default_factory=list)

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        outcome = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def last_call(self) -> Dict[str, Any]:
        return self.calls[-1]


@pytest.fixture
def make_response():
    """Return the DummyResponse factory."""
    return DummyResponse


@pytest.fixture
def make_session():
    """Return a factory building a DummySession from responses/exceptions."""
    return lambda *responses: DummySession(responses=list(responses))


@pytest.fixture
def dummy_session():
    return DummySession()


@pytest.fixture
def client(dummy_session):
    return GrocyClient(BASE_URL, API_KEY, session=dummy_session)
