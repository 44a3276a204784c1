"""Outlook pipeline components for the calendar commands.

Provides pipelines for the signed-in user's free/busy, other mailboxes'
schedules, and listing/deleting owned events.
"""

from ._base import build_work_window, wants_records, window_iso

from .freebusy import (
    FreeBusyRequest,
    FreeBusyResult,
    FreeBusyProcessor,
    FreeBusyProducer,
)

from .schedule import (
    ScheduleRequest,
    ScheduleResult,
    MailboxReport,
    ScheduleProcessor,
    ScheduleProducer,
    fetch_from_get_schedule,
    fetch_from_meeting_times,
    schedule_attempts,
)

from .events import (
    EventSummary,
    DeleteEventRequest,
    DeleteEventResult,
    DeleteEventProcessor,
    DeleteEventProducer,
    deletable_events,
)

__all__ = [
    "build_work_window",
    "wants_records",
    "window_iso",
    "FreeBusyRequest",
    "FreeBusyResult",
    "FreeBusyProcessor",
    "FreeBusyProducer",
    "ScheduleRequest",
    "ScheduleResult",
    "MailboxReport",
    "ScheduleProcessor",
    "ScheduleProducer",
    "fetch_from_get_schedule",
    "fetch_from_meeting_times",
    "schedule_attempts",
    "EventSummary",
    "DeleteEventRequest",
    "DeleteEventResult",
    "DeleteEventProcessor",
    "DeleteEventProducer",
    "deletable_events",
]
