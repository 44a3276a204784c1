"""Primitive operations on half-open time intervals."""
from __future__ import annotations

import dataclasses
from typing import Iterable, List, Optional, Sequence, TypeVar

from .models import TimeInterval

IntervalT = TypeVar("IntervalT", bound=TimeInterval)


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    """True when the two half-open intervals share any instant."""
    return a.start < b.end and b.start < a.end


def clamp(interval: IntervalT, bound: TimeInterval) -> Optional[IntervalT]:
    """Intersect ``interval`` with ``bound``; None when nothing remains.

    The returned value keeps the concrete type (and status/label) of the input.
    """
    start = max(interval.start, bound.start)
    end = min(interval.end, bound.end)
    if start >= end:
        return None
    if start == interval.start and end == interval.end:
        return interval
    return dataclasses.replace(interval, start=start, end=end)


def clamp_all(intervals: Iterable[IntervalT], bound: TimeInterval) -> List[IntervalT]:
    out: List[IntervalT] = []
    for interval in intervals:
        clamped = clamp(interval, bound)
        if clamped is not None:
            out.append(clamped)
    return out


def sort_by_start(intervals: Iterable[IntervalT]) -> List[IntervalT]:
    """Stable ascending sort on start; ties keep their input order."""
    return sorted(intervals, key=lambda iv: iv.start)


def uncovered(intervals: Sequence[TimeInterval], bound: TimeInterval) -> List[TimeInterval]:
    """Return the maximal gaps of ``bound`` not covered by any interval.

    Inputs may overlap and arrive in any order. The cursor only moves forward,
    so overlapping or adjacent inputs never produce a spurious gap.
    """
    gaps: List[TimeInterval] = []
    cursor = bound.start
    for interval in sort_by_start(clamp_all(intervals, bound)):
        if interval.start > cursor:
            gaps.append(TimeInterval(cursor, interval.start))
        if interval.end > cursor:
            cursor = interval.end
    if cursor < bound.end:
        gaps.append(TimeInterval(cursor, bound.end))
    return gaps


__all__ = ["overlaps", "clamp", "clamp_all", "sort_by_start", "uncovered"]
