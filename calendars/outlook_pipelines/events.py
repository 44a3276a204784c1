"""List and delete events the signed-in user organized on one day."""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from core.cli_errors import NotFoundError, UsageError
from core.date_utils import format_day_label, format_time, overlaps_day, parse_wall_clock, query_bounds
from core.pipeline import BaseProducer, SafeProcessor

from ._base import LOG_DRY_RUN, RULE_WIDTH_EVENTS, wants_records

MSG_NO_EVENTS = "No events found that you can delete."
MSG_ORGANIZER_ONLY = "(You can only delete events you organized)"


@dataclass
class EventSummary:
    index: int
    id: str
    subject: str
    start: str
    end: str
    location: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        return {"index": self.index, "id": self.id, "subject": self.subject, "start": self.start, "end": self.end}

    def time_range(self) -> str:
        st, en = parse_wall_clock(self.start), parse_wall_clock(self.end)
        if st is None or en is None:
            return f"{self.start} - {self.end}"
        return f"{format_time(st)} - {format_time(en)}"


@dataclass
class DeleteEventRequest:
    client: Any
    day: _dt.date
    search: Optional[str] = None
    index: Optional[int] = None
    dry_run: bool = False


@dataclass
class DeleteEventResult:
    day: _dt.date
    events: List[EventSummary]
    deleted: Optional[EventSummary] = None
    dry_run: bool = False


def deletable_events(
    events: List[Dict[str, Any]],
    search: Optional[str] = None,
    day: Optional[_dt.date] = None,
) -> List[EventSummary]:
    """Events the user organized and has not cancelled, optionally filtered by subject.

    With ``day``, events whose wall-clock span misses that day are dropped;
    the calendarView query is padded past both midnights.
    """
    own = [e for e in events if e.get("isOrganizer") and not e.get("isCancelled")]
    if day is not None:
        own = [e for e in own if overlaps_day(e.get("start"), e.get("end"), day)]
    if search:
        needle = search.lower()
        own = [e for e in own if needle in (e.get("subject") or "").lower()]
    return [
        EventSummary(
            index=i,
            id=str(e.get("id") or ""),
            subject=e.get("subject") or "",
            start=(e.get("start") or {}).get("dateTime") or "",
            end=(e.get("end") or {}).get("dateTime") or "",
            location=((e.get("location") or {}).get("displayName") or None),
        )
        for i, e in enumerate(own, start=1)
    ]


class DeleteEventProcessor(SafeProcessor[DeleteEventRequest, DeleteEventResult]):
    """Without an index, lists candidates; with one, deletes that event."""

    def _process_safe(self, payload: DeleteEventRequest) -> DeleteEventResult:
        start_iso, end_iso = query_bounds(payload.day)
        raw = payload.client.list_calendar_view(start_iso=start_iso, end_iso=end_iso)
        events = deletable_events(raw, payload.search, day=payload.day)
        result = DeleteEventResult(day=payload.day, events=events, dry_run=payload.dry_run)
        if payload.index is None:
            return result
        if not events:
            raise NotFoundError(MSG_NO_EVENTS, hint=MSG_ORGANIZER_ONLY)
        if not 1 <= payload.index <= len(events):
            raise UsageError(
                f"Invalid event number: {payload.index}",
                hint=f"Valid range: 1-{len(events)}",
            )
        target = events[payload.index - 1]
        if not payload.dry_run:
            payload.client.delete_event(target.id)
        result.deleted = target
        return result


class DeleteEventProducer(BaseProducer):
    def _produce_success(self, payload: DeleteEventResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        if payload.deleted is not None:
            self._produce_deleted(payload)
            return
        if wants_records(self.writer):
            self.writer.print_data({"events": [e.to_record() for e in payload.events]})
            return
        self._produce_listing(payload)

    def _produce_deleted(self, payload: DeleteEventResult) -> None:
        ev = payload.deleted
        if wants_records(self.writer):
            data: Dict[str, Any] = {"success": True, "deleted": ev.subject}
            if payload.dry_run:
                data["dry_run"] = True
            self.writer.print_data(data)
            return
        self.writer.print(f"\nDeleting: {ev.subject}")
        self.writer.print(f"  {format_day_label(payload.day)} {ev.time_range()}")
        if payload.dry_run:
            self.writer.print(f"\n{LOG_DRY_RUN} Event not deleted.\n")
        else:
            self.writer.print("\n✓ Event deleted successfully.\n")

    def _produce_listing(self, payload: DeleteEventResult) -> None:
        w = self.writer
        w.print(f"\nYour events for {format_day_label(payload.day)}:\n")
        w.print("─" * RULE_WIDTH_EVENTS)
        if not payload.events:
            w.print(f"\n  {MSG_NO_EVENTS}")
            w.print(f"  {MSG_ORGANIZER_ONLY}\n")
            return
        for ev in payload.events:
            w.print(f"\n  [{ev.index}] {ev.subject}")
            w.print(f"      {ev.time_range()}")
            if ev.location:
                w.print(f"      Location: {ev.location}")
        w.print("\n" + "─" * RULE_WIDTH_EVENTS)
        w.print("\nTo delete an event:")
        w.print("  outlook-assistant delete-event <number>")
        w.print("  outlook-assistant delete-event <number> --day tomorrow")
        w.print("")
