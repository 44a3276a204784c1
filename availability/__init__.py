"""Availability reconciliation engine.

Turns the different shapes Graph uses to describe a calendar's occupancy
into one working-hours-bounded interval model:

- intervals.py: overlap, clamp, stable sort, uncovered gaps
- decoder.py: availabilityView strings -> status runs
- inverter.py: busy time from free-only schedule items
- free_slots.py: free time from busy slots
- sources.py: tagged source shapes and the busy/free views
- fallback.py: ordered attempts across remote sources
- formatter.py: durations, records and report lines

Usage:
    from availability import SlotList, WorkWindow, free_view

    window = WorkWindow(day=date(2024, 1, 1), start_hour=9, end_hour=17)
    slots = free_view(SlotList.from_events(events), window)
"""

from .models import StatusInterval, StatusKind, TimeInterval, WorkWindow
from .intervals import clamp, overlaps, sort_by_start
from .decoder import decode_availability_view
from .inverter import busy_from_free_items, invert_free_time
from .free_slots import extract_free_slots, free
from .sources import (
    AvailabilitySource,
    AvailabilityView,
    FreeItemList,
    MailboxAvailability,
    SlotList,
    busy_view,
    free_view,
)
from .fallback import SourceAttempt, first_successful

__all__ = [
    "StatusKind",
    "TimeInterval",
    "StatusInterval",
    "WorkWindow",
    "overlaps",
    "clamp",
    "sort_by_start",
    "decode_availability_view",
    "invert_free_time",
    "busy_from_free_items",
    "extract_free_slots",
    "free",
    "AvailabilitySource",
    "AvailabilityView",
    "FreeItemList",
    "SlotList",
    "MailboxAvailability",
    "busy_view",
    "free_view",
    "SourceAttempt",
    "first_successful",
]
