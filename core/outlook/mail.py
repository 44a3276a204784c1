"""Mail operations for Outlook via Microsoft Graph."""

from __future__ import annotations

from .client import GRAPH, OutlookClientBase
from .models import MailParams


class OutlookMailMixin:
    """Mixin providing message sending.

    Requires OutlookClientBase methods: _request
    """

    def send_mail(self: OutlookClientBase, params: MailParams) -> None:
        """Send a message; Graph answers 202 with no body."""
        if not params.to:
            raise ValueError("At least one recipient is required")
        self._request("post", f"{GRAPH}/me/sendMail", action="Send mail", json=params.to_payload())
