"""Remote availability shapes and their normalisation.

Three shapes reach the engine, depending on which Graph endpoint answered:

- SlotList: the caller's own calendar view, one entry per event with its
  ``showAs`` status and subject.
- FreeItemList: meeting-time suggestions for another mailbox; only the free
  entries carry information, busy time is what they leave uncovered.
- AvailabilityView: the compressed one-character-per-bucket string from
  ``getSchedule``.

Each shape turns itself into StatusIntervals via ``to_intervals``; the busy
and free views below never look at the concrete shape beyond ``free_only``.
"""
from __future__ import annotations

import datetime as _dt
import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Tuple, Union

from core.date_utils import parse_wall_clock

from .decoder import DEFAULT_BUCKET_MINUTES, decode_availability_view
from .free_slots import extract_free_slots, free
from .intervals import clamp_all, sort_by_start
from .inverter import busy_from_free_items
from .models import StatusInterval, StatusKind, WorkWindow

LOG = logging.getLogger(__name__)


def _items_to_intervals(items: Iterable[Dict[str, Any]]) -> List[StatusInterval]:
    out: List[StatusInterval] = []
    for item in items:
        start = parse_wall_clock(item.get("start"))
        end = parse_wall_clock(item.get("end"))
        if start is None or end is None or start >= end:
            LOG.debug("Skipping malformed schedule item: %r", item)
            continue
        out.append(
            StatusInterval(
                start,
                end,
                status=StatusKind.parse(item.get("status")),
                label=(item.get("subject") or None),
            )
        )
    return out


@dataclass(frozen=True)
class SlotList:
    """Busy/free slots for the signed-in user."""

    items: Tuple[Dict[str, Any], ...] = ()

    free_only: ClassVar[bool] = False

    @classmethod
    def from_events(cls, events: Iterable[Dict[str, Any]]) -> "SlotList":
        """Build from Graph calendarView events, skipping cancelled ones."""
        slots = []
        for ev in events:
            if ev.get("isCancelled"):
                continue
            slots.append({
                "start": (ev.get("start") or {}).get("dateTime"),
                "end": (ev.get("end") or {}).get("dateTime"),
                "status": ev.get("showAs") or "busy",
                "subject": ev.get("subject"),
            })
        return cls(tuple(slots))

    def to_intervals(self) -> List[StatusInterval]:
        return _items_to_intervals(self.items)


@dataclass(frozen=True)
class FreeItemList:
    """Schedule items for another mailbox where only free entries matter."""

    items: Tuple[Dict[str, Any], ...] = ()

    free_only: ClassVar[bool] = True

    @classmethod
    def from_suggestions(cls, suggestions: Iterable[Dict[str, Any]], address: str) -> "FreeItemList":
        """Build from findMeetingTimes suggestions for a single attendee."""
        target = (address or "").strip().lower()
        items = []
        for sug in suggestions:
            slot = sug.get("meetingTimeSlot") or {}
            status = "free"
            for att in sug.get("attendeeAvailability") or []:
                em = (((att.get("attendee") or {}).get("emailAddress") or {}).get("address") or "")
                if em.strip().lower() == target:
                    status = att.get("availability") or "unknown"
                    break
            items.append({
                "start": (slot.get("start") or {}).get("dateTime"),
                "end": (slot.get("end") or {}).get("dateTime"),
                "status": status,
            })
        return cls(tuple(items))

    def to_intervals(self) -> List[StatusInterval]:
        return _items_to_intervals(self.items)


@dataclass(frozen=True)
class AvailabilityView:
    """Compressed per-bucket status string starting at ``start``."""

    code: str
    start: _dt.datetime
    bucket_minutes: int = DEFAULT_BUCKET_MINUTES

    free_only: ClassVar[bool] = False

    def to_intervals(self) -> List[StatusInterval]:
        return decode_availability_view(self.code, self.start, self.bucket_minutes)


AvailabilitySource = Union[SlotList, FreeItemList, AvailabilityView]


def busy_view(source: AvailabilitySource, window: WorkWindow) -> List[StatusInterval]:
    """Non-free intervals inside ``window``, each with its real status.

    Overlapping events from a slot list are reported individually so each
    keeps its own subject. That is the one case where the result may overlap;
    free-item lists and availability views never do.
    """
    intervals = source.to_intervals()
    if source.free_only:
        return busy_from_free_items(intervals, window)
    occupied = [iv for iv in intervals if not iv.status.is_free]
    return sort_by_start(clamp_all(occupied, window.bounds))


def free_view(source: AvailabilitySource, window: WorkWindow) -> List[StatusInterval]:
    """Free intervals inside ``window``; statuses collapse to Free."""
    if source.free_only:
        return extract_free_slots(busy_view(source, window), window)
    return free(source.to_intervals(), window)


@dataclass
class MailboxAvailability:
    """Normalised availability for one mailbox."""

    address: str
    source: AvailabilitySource
    source_name: Optional[str] = None

    def busy(self, window: WorkWindow) -> List[StatusInterval]:
        return busy_view(self.source, window)

    def free(self, window: WorkWindow) -> List[StatusInterval]:
        return free_view(self.source, window)


__all__ = [
    "SlotList",
    "FreeItemList",
    "AvailabilityView",
    "AvailabilitySource",
    "MailboxAvailability",
    "busy_view",
    "free_view",
]
