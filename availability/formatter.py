"""Rendering of availability results as records or report lines.

Consumes already-normalised intervals; nothing here sorts, clamps or merges.
"""
from __future__ import annotations

import datetime as _dt
import math
from typing import Any, Dict, Iterable, List, Optional

from core.date_utils import format_day_label, format_time, to_iso_str

from .models import StatusInterval, StatusKind, TimeInterval

RULE_WIDTH = 40
MSG_NO_FREE_TIME = "No free time during working hours."
MSG_ALL_DAY_FREE = "All day free!"

_STATUS_ICONS = {
    StatusKind.FREE: "🟢",
    StatusKind.TENTATIVE: "🟡",
    StatusKind.BUSY: "🔴",
}
_DEFAULT_ICON = "⚪"


def status_icon(status: StatusKind) -> str:
    return _STATUS_ICONS.get(status, _DEFAULT_ICON)


def duration_minutes(interval: TimeInterval) -> int:
    """Whole minutes, rounding half up."""
    return int(math.floor(interval.duration.total_seconds() / 60 + 0.5))


def format_duration(minutes: int) -> str:
    """Render minutes as '1h 30m', '2h', '45m' or '0m'."""
    minutes = max(int(minutes), 0)
    hours, mins = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {mins}m" if mins else f"{hours}h"
    return f"{mins}m"


# -------------------- Structured records --------------------

def free_slot_record(interval: TimeInterval) -> Dict[str, Any]:
    return {"start": to_iso_str(interval.start), "end": to_iso_str(interval.end)}


def busy_slot_record(interval: StatusInterval) -> Dict[str, Any]:
    return {
        "start": to_iso_str(interval.start),
        "end": to_iso_str(interval.end),
        "status": interval.status.value,
        "subject": interval.label,
    }


def busy_summary(interval: StatusInterval) -> Dict[str, Any]:
    """Busy block for another mailbox, in the getSchedule field naming."""
    return {
        "startTime": to_iso_str(interval.start),
        "endTime": to_iso_str(interval.end),
        "status": interval.status.value,
    }


# -------------------- Text lines --------------------

def free_slot_line(interval: TimeInterval) -> str:
    dur = format_duration(duration_minutes(interval))
    return f"  {status_icon(StatusKind.FREE)} {format_time(interval.start)} - {format_time(interval.end)} ({dur})"


def busy_slot_line(interval: StatusInterval) -> str:
    label = interval.label or interval.status.value
    return f"  {status_icon(interval.status)} {format_time(interval.start)} - {format_time(interval.end)}: {label}"


def free_lines(slots: Iterable[TimeInterval]) -> List[str]:
    lines = [free_slot_line(s) for s in slots]
    return lines or [f"  {MSG_NO_FREE_TIME}"]


def busy_lines(slots: Iterable[StatusInterval]) -> List[str]:
    lines = [busy_slot_line(s) for s in slots]
    return lines or [f"  {status_icon(StatusKind.FREE)} {MSG_ALL_DAY_FREE}"]


def report_header(day: _dt.date, *, free_view: bool, who: Optional[str] = None) -> List[str]:
    title = "Free times" if free_view else "Busy times"
    suffix = f" ({who})" if who else ""
    return [f"📊 {title} for {format_day_label(day)}{suffix}", "─" * RULE_WIDTH]


def render_report(
    day: _dt.date,
    intervals: List[StatusInterval],
    *,
    free_view: bool,
    who: Optional[str] = None,
) -> List[str]:
    """Header plus one line per interval, or the matching empty message."""
    body = free_lines(intervals) if free_view else busy_lines(intervals)
    return report_header(day, free_view=free_view, who=who) + body


__all__ = [
    "MSG_ALL_DAY_FREE",
    "MSG_NO_FREE_TIME",
    "status_icon",
    "duration_minutes",
    "format_duration",
    "free_slot_record",
    "busy_slot_record",
    "busy_summary",
    "free_slot_line",
    "busy_slot_line",
    "free_lines",
    "busy_lines",
    "report_header",
    "render_report",
]
