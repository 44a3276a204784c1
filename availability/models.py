"""Interval and status types for the availability engine.

All timestamps are naive wall-clock datetimes in the mailbox time zone.
Values are frozen; every transformation returns a new instance.
"""
from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class StatusKind(str, Enum):
    """Occupancy status reported for a block of time."""

    FREE = "Free"
    TENTATIVE = "Tentative"
    BUSY = "Busy"
    OUT_OF_OFFICE = "OutOfOffice"
    WORKING_ELSEWHERE = "WorkingElsewhere"
    UNKNOWN = "Unknown"

    @property
    def is_free(self) -> bool:
        return self is StatusKind.FREE

    @classmethod
    def parse(cls, value: Any) -> "StatusKind":
        """Map a Graph ``showAs``/``status`` string to a StatusKind.

        Accepts both the camelCase Graph values (``oof``, ``workingElsewhere``)
        and the enum display values. Anything unrecognised is ``UNKNOWN``.
        """
        if isinstance(value, StatusKind):
            return value
        key = str(value or "").strip().lower().replace("_", "").replace(" ", "")
        return _STATUS_ALIASES.get(key, cls.UNKNOWN)


_STATUS_ALIASES = {
    "free": StatusKind.FREE,
    "tentative": StatusKind.TENTATIVE,
    "busy": StatusKind.BUSY,
    "oof": StatusKind.OUT_OF_OFFICE,
    "outofoffice": StatusKind.OUT_OF_OFFICE,
    "away": StatusKind.OUT_OF_OFFICE,
    "workingelsewhere": StatusKind.WORKING_ELSEWHERE,
    "unknown": StatusKind.UNKNOWN,
}


@dataclass(frozen=True)
class TimeInterval:
    """Half-open interval ``[start, end)``."""

    start: _dt.datetime
    end: _dt.datetime

    def __post_init__(self) -> None:
        if not self.start < self.end:
            raise ValueError(f"Interval start must precede end: {self.start} >= {self.end}")

    @property
    def duration(self) -> _dt.timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class StatusInterval(TimeInterval):
    """A time interval tagged with a status and an optional display label."""

    status: StatusKind = StatusKind.BUSY
    label: Optional[str] = None


@dataclass(frozen=True)
class WorkWindow:
    """Working hours ``[day@start_hour, day@end_hour)`` for one day.

    ``end_hour`` may be 24 to mean midnight at the end of ``day``.
    """

    day: _dt.date
    start_hour: int = 9
    end_hour: int = 17

    def __post_init__(self) -> None:
        if not 0 <= self.start_hour <= 23:
            raise ValueError(f"Work start hour must be 0-23, got {self.start_hour}")
        if not 1 <= self.end_hour <= 24:
            raise ValueError(f"Work end hour must be 1-24, got {self.end_hour}")
        if self.start_hour >= self.end_hour:
            raise ValueError(
                f"Work start hour ({self.start_hour}) must be before end hour ({self.end_hour})"
            )

    @classmethod
    def full_day(cls, day: _dt.date) -> "WorkWindow":
        return cls(day=day, start_hour=0, end_hour=24)

    @property
    def start(self) -> _dt.datetime:
        return _dt.datetime.combine(self.day, _dt.time.min) + _dt.timedelta(hours=self.start_hour)

    @property
    def end(self) -> _dt.datetime:
        return _dt.datetime.combine(self.day, _dt.time.min) + _dt.timedelta(hours=self.end_hour)

    @property
    def bounds(self) -> TimeInterval:
        return TimeInterval(self.start, self.end)


__all__ = [
    "StatusKind",
    "TimeInterval",
    "StatusInterval",
    "WorkWindow",
]
