"""Ordered, single-attempt fallback between availability sources."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, List, Sequence, Tuple, TypeVar

from core.cli_errors import LOGIN_HINT, AuthError, NetworkError

LOG = logging.getLogger(__name__)

T = TypeVar("T")

MSG_ALL_FAILED = "Failed to fetch schedule"
HINT_SHARING = "Check the addresses and that their calendars are shared with you."


@dataclass(frozen=True)
class SourceAttempt(Generic[T]):
    """One named way of fetching availability data."""

    name: str
    fetch: Callable[[], T]


def first_successful(attempts: Sequence[SourceAttempt[T]]) -> Tuple[str, T]:
    """Run attempts in order, once each, returning (name, result) of the first success.

    Raises NetworkError listing every failure when all attempts fail. When
    every failure was an AuthError the combined error stays an AuthError and
    keeps its login hint.
    """
    if not attempts:
        raise ValueError("At least one source attempt is required")
    errors: List[Exception] = []
    failures: List[str] = []
    for attempt in attempts:
        try:
            result = attempt.fetch()
        except Exception as exc:
            LOG.debug("Availability source %s failed: %s", attempt.name, exc)
            errors.append(exc)
            failures.append(f"{attempt.name}: {exc}")
            continue
        LOG.debug("Availability source %s succeeded", attempt.name)
        return attempt.name, result
    message = f"{MSG_ALL_FAILED} (" + "; ".join(failures) + ")"
    if all(isinstance(exc, AuthError) for exc in errors):
        raise AuthError(message, hint=errors[-1].hint or LOGIN_HINT)
    raise NetworkError(message, hint=HINT_SHARING)


__all__ = ["SourceAttempt", "first_successful"]
