"""Calendar, event and availability operations for Outlook via Microsoft Graph."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from core.constants import DEFAULT_BUCKET_MINUTES, DEFAULT_PAGE_SIZE

from .client import GRAPH, OutlookClientBase
from .models import TimeRange

LOG = logging.getLogger(__name__)

_EVENT_FIELDS = "id,subject,start,end,showAs,isCancelled,isOrganizer,isAllDay,location,organizer"


class OutlookCalendarMixin:
    """Mixin providing calendar and event operations.

    Requires OutlookClientBase methods: _request, _json, _timezone_header,
    resolve_timezone
    """

    # -------------------- Internal helpers --------------------
    def _paginated_get(
        self: OutlookClientBase,
        url: str,
        *,
        action: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> List[Dict[str, Any]]:
        """Fetch all pages from a paginated Graph API endpoint."""
        out: List[Dict[str, Any]] = []
        next_url: Optional[str] = url
        while next_url:
            data = self._json("get", next_url, action=action, params=params, headers=headers)
            out.extend(data.get("value", []) or [])
            next_url = data.get("@odata.nextLink")
            # nextLink already carries the query string
            params = None
        return out

    # -------------------- Events --------------------
    def list_calendar_view(
        self: OutlookClientBase,
        *,
        start_iso: str,
        end_iso: str,
        top: int = DEFAULT_PAGE_SIZE,
    ) -> List[Dict[str, Any]]:
        """List calendar view (expanded occurrences) for a date range.

        Graph reads ``start_iso``/``end_iso`` as UTC unless they carry an offset;
        start/end times come back as wall-clock values in the resolved time zone.
        """
        params = {
            "startDateTime": start_iso,
            "endDateTime": end_iso,
            "$top": int(top),
            "$select": _EVENT_FIELDS,
            "$orderby": "start/dateTime",
        }
        return self._paginated_get(
            f"{GRAPH}/me/calendarView",
            action="List calendar events",
            params=params,
            headers=self._timezone_header(),
        )

    def delete_event(self: OutlookClientBase, event_id: str) -> None:
        if not event_id:
            raise ValueError("event_id is required")
        self._request("delete", f"{GRAPH}/me/events/{event_id}", action="Delete event")

    # -------------------- Availability --------------------
    def get_schedule(
        self: OutlookClientBase,
        addresses: Sequence[str],
        *,
        start_iso: str,
        end_iso: str,
        interval: int = DEFAULT_BUCKET_MINUTES,
    ) -> List[Dict[str, Any]]:
        """Free/busy for several mailboxes via ``getSchedule``.

        Returns one entry per address with ``scheduleId``, ``availabilityView``
        and ``scheduleItems``. An entry carrying an ``error`` object means that
        mailbox could not be read.
        """
        rng = TimeRange(start_iso, end_iso, self.resolve_timezone()).to_graph()
        body = {
            "schedules": list(addresses),
            "startTime": rng["start"],
            "endTime": rng["end"],
            "availabilityViewInterval": int(interval),
        }
        data = self._json(
            "post",
            f"{GRAPH}/me/calendar/getSchedule",
            action="Get schedule",
            json=body,
            headers=self._timezone_header(),
        )
        return data.get("value", []) or []

    def find_meeting_times(
        self: OutlookClientBase,
        address: str,
        *,
        start_iso: str,
        end_iso: str,
        duration_minutes: int = DEFAULT_BUCKET_MINUTES,
        max_candidates: int = DEFAULT_PAGE_SIZE,
    ) -> List[Dict[str, Any]]:
        """Slots where ``address`` is available, via ``findMeetingTimes``."""
        rng = TimeRange(start_iso, end_iso, self.resolve_timezone()).to_graph()
        body = {
            "attendees": [{"type": "required", "emailAddress": {"address": address}}],
            "timeConstraint": {"activityDomain": "unrestricted", "timeSlots": [rng]},
            "meetingDuration": f"PT{int(duration_minutes)}M",
            "maxCandidates": int(max_candidates),
            "isOrganizerOptional": True,
            "minimumAttendeePercentage": 100,
            "returnSuggestionReasons": False,
        }
        data = self._json(
            "post",
            f"{GRAPH}/me/findMeetingTimes",
            action="Find meeting times",
            json=body,
            headers=self._timezone_header(),
        )
        reason = data.get("emptySuggestionsReason")
        if reason:
            LOG.debug("findMeetingTimes for %s returned no suggestions: %s", address, reason)
        return data.get("meetingTimeSuggestions", []) or []
