"""Outlook API client for Microsoft Graph operations.

This package provides a modular client for Outlook mail and calendar operations:
- client.py: Authentication, request plumbing and error translation
- calendar.py: Calendar view, event deletion and availability lookups
- mail.py: Sending messages
- models.py: Request parameter dataclasses

Usage:
    from core.outlook import OutlookClient

    client = OutlookClient(client_id="...", tenant="consumers", token_path="...")
    client.authenticate()
    events = client.list_calendar_view(start_iso="...", end_iso="...")
"""

from .client import OutlookClientBase, _requests, raise_for_graph_status
from core.constants import GRAPH_API_URL, GRAPH_API_SCOPES
from .calendar import OutlookCalendarMixin
from .mail import OutlookMailMixin
from .models import MailParams, TimeRange, recipients, split_addresses


class OutlookClient(OutlookClientBase, OutlookCalendarMixin, OutlookMailMixin):
    """Microsoft Graph client for Outlook mail and calendar operations.

    Combines base auth with calendar and mail mixins.
    """
    pass


__all__ = [
    "OutlookClient",
    "OutlookClientBase",
    "OutlookCalendarMixin",
    "OutlookMailMixin",
    "MailParams",
    "TimeRange",
    "recipients",
    "split_addresses",
    "raise_for_graph_status",
    "GRAPH_API_URL",
    "GRAPH_API_SCOPES",
    "_requests",
]
