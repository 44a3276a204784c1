"""Shared fake/mock objects for testing.

Modules:
    outlook - FakeOutlookClient and findMeetingTimes suggestion builder
"""

from __future__ import annotations

from tests.fakes.outlook import FakeOutlookClient, make_suggestion

__all__ = [
    "FakeOutlookClient",
    "make_suggestion",
]
