"""Free/busy for the signed-in user's own calendar."""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from availability import SlotList, StatusInterval, WorkWindow, busy_view, free_view
from availability.formatter import busy_slot_record, free_slot_record, render_report
from core.date_utils import query_bounds
from core.pipeline import BaseProducer, SafeProcessor

from ._base import build_work_window, wants_records


@dataclass
class FreeBusyRequest:
    client: Any
    day: _dt.date
    work_start: int = 9
    work_end: int = 17
    free: bool = False


@dataclass
class FreeBusyResult:
    day: _dt.date
    free: bool
    intervals: List[StatusInterval]


class FreeBusyProcessor(SafeProcessor[FreeBusyRequest, FreeBusyResult]):
    """Busy blocks over the whole day, or free slots within working hours."""

    def _process_safe(self, payload: FreeBusyRequest) -> FreeBusyResult:
        window = build_work_window(payload.day, payload.work_start, payload.work_end)
        start_iso, end_iso = query_bounds(payload.day)
        events = payload.client.list_calendar_view(start_iso=start_iso, end_iso=end_iso)
        source = SlotList.from_events(events)
        if payload.free:
            intervals = free_view(source, window)
        else:
            intervals = busy_view(source, WorkWindow.full_day(payload.day))
        return FreeBusyResult(day=payload.day, free=payload.free, intervals=intervals)


class FreeBusyProducer(BaseProducer):
    def _produce_success(self, payload: FreeBusyResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        if wants_records(self.writer):
            record = free_slot_record if payload.free else busy_slot_record
            self.writer.print_data([record(iv) for iv in payload.intervals])
            return
        self.writer.print("")
        self.writer.print_lines(render_report(payload.day, payload.intervals, free_view=payload.free))
        self.writer.print("")
