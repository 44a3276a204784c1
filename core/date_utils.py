"""Shared date and time utilities.

Provides day keyword parsing, day windows, and parsing of Graph
``dateTime`` strings into naive wall-clock datetimes.
"""
from __future__ import annotations

import datetime as _dt
import re
from typing import Any, Callable, Optional, Tuple

from .constants import FMT_DATETIME_SEC, FMT_DAY_START, FMT_UTC_INSTANT, MAX_UTC_OFFSET_HOURS

__all__ = [
    "DAY_KEYWORDS",
    "parse_day",
    "query_bounds",
    "day_span",
    "overlaps_day",
    "parse_wall_clock",
    "format_time",
    "format_day_label",
    "to_iso_str",
]

# Relative day keyword -> offset from today
DAY_KEYWORDS = {
    "today": 0,
    "tomorrow": 1,
    "yesterday": -1,
}

# Graph returns up to 7 fractional digits ("2024-01-01T09:00:00.0000000")
_FRACTION_RE = re.compile(r"\.(\d+)")
_OFFSET_RE = re.compile(r"([+-]\d{2}:?\d{2}|Z)$")


def parse_day(value: Optional[str], today: Optional[Callable[[], _dt.date]] = None) -> _dt.date:
    """Resolve a day keyword or ISO date; anything unparseable means today.

    Examples:
        'today' -> date.today()
        'Tomorrow' -> date.today() + 1 day
        '2024-03-05' -> date(2024, 3, 5)
        'garbage' -> date.today()
    """
    base = (today or _dt.date.today)()
    key = (value or "today").strip().lower()
    if key in DAY_KEYWORDS:
        return base + _dt.timedelta(days=DAY_KEYWORDS[key])
    try:
        return _dt.date.fromisoformat(key[:10])
    except ValueError:
        return base


def day_span(day: _dt.date) -> Tuple[_dt.datetime, _dt.datetime]:
    """Return wall-clock (midnight, next midnight) for ``day``."""
    start = _dt.datetime.combine(day, _dt.time())
    return start, start + _dt.timedelta(days=1)


def query_bounds(day: _dt.date) -> Tuple[str, str]:
    """Return UTC (start, end) instants covering ``day`` in any time zone.

    Graph reads calendarView bounds as UTC, so the local day is padded by the
    widest offset on each side. Callers clamp or filter the results back to
    the wall-clock day.
    """
    start, end = day_span(day)
    pad = _dt.timedelta(hours=MAX_UTC_OFFSET_HOURS)
    return (start - pad).strftime(FMT_UTC_INSTANT), (end + pad).strftime(FMT_UTC_INSTANT)


def overlaps_day(start: Any, end: Any, day: _dt.date) -> bool:
    """True when a wall-clock span (Graph dateTime values) touches ``day``.

    A missing or non-positive end counts as an instant at ``start``.
    """
    st = parse_wall_clock(start)
    if st is None:
        return False
    en = parse_wall_clock(end)
    lo, hi = day_span(day)
    if en is None or en <= st:
        return lo <= st < hi
    return st < hi and en > lo


def parse_wall_clock(value: Any) -> Optional[_dt.datetime]:
    """Parse a Graph dateTime string into a naive datetime.

    Any trailing UTC offset is dropped; the caller already asked Graph for
    times in the mailbox time zone. Returns None for empty or invalid input.
    """
    if isinstance(value, _dt.datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, dict):
        value = value.get("dateTime")
    s = str(value or "").strip()
    if not s:
        return None
    s = _OFFSET_RE.sub("", s)
    s = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), s, count=1)
    try:
        return _dt.datetime.fromisoformat(s)
    except ValueError:
        return None


def format_time(value: _dt.datetime) -> str:
    """24-hour HH:MM."""
    return value.strftime("%H:%M")


def format_day_label(day: _dt.date) -> str:
    """Short label like 'Mon Jan 1'."""
    return f"{day:%a %b} {day.day}"


def to_iso_str(v: Any) -> Optional[str]:
    """Convert a value to ISO datetime string.

    Args:
        v: A datetime, date, string, or other value.

    Returns:
        ISO-formatted string, or None if input is None.
    """
    if v is None:
        return None
    if isinstance(v, str):
        return v
    if isinstance(v, _dt.datetime):
        return v.strftime(FMT_DATETIME_SEC)
    if isinstance(v, _dt.date):
        return v.strftime(FMT_DAY_START)
    return str(v)
