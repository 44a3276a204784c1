"""Free/busy for other mailboxes, with getSchedule -> findMeetingTimes fallback."""

from __future__ import annotations

import datetime as _dt
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from availability import (
    AvailabilityView,
    FreeItemList,
    MailboxAvailability,
    SourceAttempt,
    StatusInterval,
    WorkWindow,
    first_successful,
)
from availability.formatter import busy_summary, free_slot_record, render_report
from core.cli_errors import NetworkError, UsageError
from core.constants import DEFAULT_BUCKET_MINUTES
from core.pipeline import BaseProducer, SafeProcessor

from ._base import build_work_window, wants_records, window_iso

LOG = logging.getLogger(__name__)

SOURCE_GET_SCHEDULE = "getSchedule"
SOURCE_FIND_MEETING_TIMES = "findMeetingTimes"


@dataclass
class ScheduleRequest:
    client: Any
    addresses: List[str]
    day: _dt.date
    work_start: int = 9
    work_end: int = 17
    free: bool = False
    interval: int = DEFAULT_BUCKET_MINUTES


@dataclass
class MailboxReport:
    address: str
    intervals: List[StatusInterval] = field(default_factory=list)


@dataclass
class ScheduleResult:
    day: _dt.date
    free: bool
    source: str
    mailboxes: List[MailboxReport]


def _schedule_for(entries: Sequence[Dict[str, Any]], address: str) -> Optional[Dict[str, Any]]:
    target = address.strip().lower()
    for entry in entries:
        if str(entry.get("scheduleId") or "").strip().lower() == target:
            return entry
    return None


def fetch_from_get_schedule(
    client: Any,
    addresses: Sequence[str],
    window: WorkWindow,
    interval: int,
) -> List[MailboxAvailability]:
    """Decode getSchedule availability views; any unreadable mailbox fails the source."""
    start_iso, end_iso = window_iso(window)
    entries = client.get_schedule(addresses, start_iso=start_iso, end_iso=end_iso, interval=interval)
    out: List[MailboxAvailability] = []
    for address in addresses:
        entry = _schedule_for(entries, address)
        if entry is None:
            raise NetworkError(f"No schedule returned for {address}")
        err = entry.get("error")
        if err:
            raise NetworkError(f"{address}: {err.get('message') or err.get('responseCode') or err}")
        code = entry.get("availabilityView")
        if code is None:
            raise NetworkError(f"No availability view returned for {address}")
        out.append(MailboxAvailability(
            address=address,
            source=AvailabilityView(str(code), window.start, interval),
            source_name=SOURCE_GET_SCHEDULE,
        ))
    return out


def fetch_from_meeting_times(
    client: Any,
    addresses: Sequence[str],
    window: WorkWindow,
    interval: int,
) -> List[MailboxAvailability]:
    """Free suggestions per mailbox; busy time is whatever they leave uncovered."""
    start_iso, end_iso = window_iso(window)
    out: List[MailboxAvailability] = []
    for address in addresses:
        suggestions = client.find_meeting_times(
            address, start_iso=start_iso, end_iso=end_iso, duration_minutes=interval
        )
        out.append(MailboxAvailability(
            address=address,
            source=FreeItemList.from_suggestions(suggestions, address),
            source_name=SOURCE_FIND_MEETING_TIMES,
        ))
    return out


def schedule_attempts(
    client: Any,
    addresses: Sequence[str],
    window: WorkWindow,
    interval: int,
) -> List[SourceAttempt[List[MailboxAvailability]]]:
    """Ordered sources for other mailboxes' availability."""
    return [
        SourceAttempt(SOURCE_GET_SCHEDULE, lambda: fetch_from_get_schedule(client, addresses, window, interval)),
        SourceAttempt(SOURCE_FIND_MEETING_TIMES, lambda: fetch_from_meeting_times(client, addresses, window, interval)),
    ]


class ScheduleProcessor(SafeProcessor[ScheduleRequest, ScheduleResult]):
    def _process_safe(self, payload: ScheduleRequest) -> ScheduleResult:
        if not payload.addresses:
            raise UsageError("At least one email address is required")
        if int(payload.interval) <= 0:
            raise UsageError(f"Interval must be a positive number of minutes, got {payload.interval}")
        window = build_work_window(payload.day, payload.work_start, payload.work_end)
        source, mailboxes = first_successful(
            schedule_attempts(payload.client, payload.addresses, window, int(payload.interval))
        )
        LOG.debug("Schedule for %d mailbox(es) served by %s", len(mailboxes), source)
        reports = [
            MailboxReport(mb.address, mb.free(window) if payload.free else mb.busy(window))
            for mb in mailboxes
        ]
        return ScheduleResult(day=payload.day, free=payload.free, source=source, mailboxes=reports)


class ScheduleProducer(BaseProducer):
    def _produce_success(self, payload: ScheduleResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        if wants_records(self.writer):
            key = "free" if payload.free else "busy"
            record = free_slot_record if payload.free else busy_summary
            self.writer.print_data([
                {"email": mb.address, key: [record(iv) for iv in mb.intervals]}
                for mb in payload.mailboxes
            ])
            return
        for mb in payload.mailboxes:
            self.writer.print("")
            self.writer.print_lines(
                render_report(payload.day, mb.intervals, free_view=payload.free, who=mb.address)
            )
        self.writer.print("")
        self.writer.print_verbose(f"(source: {payload.source})")
