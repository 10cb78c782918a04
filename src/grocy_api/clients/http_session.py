"""requests.Session configuration helpers for the Grocy client."""
from __future__ import annotations

from typing import Callable, Mapping, Optional, ParamSpec, TypeVar

import requests

P = ParamSpec("P")
R = TypeVar("R")


def configure_session(
    session: requests.Session,
    *,
    headers: Mapping[str, str] | None,
    timeout_seconds: Optional[float] = None,
) -> requests.Session:
    """
    Apply shared headers and an optional default timeout to a session.

    No retry adapter is mounted: every Grocy call goes out exactly once.
    """
    if headers:
        session.headers.update(headers)

    if timeout_seconds is not None:
        session.request = _with_timeout(session.request, timeout_seconds)  # type: ignore[assignment]
    return session


def _with_timeout(fn: Callable[P, R], default_timeout: float) -> Callable[P, R]:
    """Wrap requests methods to default the timeout."""
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        kwargs.setdefault("timeout", default_timeout)
        return fn(*args, **kwargs)

    return wrapper
