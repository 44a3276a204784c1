"""Data models for Outlook calendar and mail operations."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def recipients(addresses: Optional[List[str]]) -> List[Dict[str, Any]]:
    """Graph recipient objects for plain addresses."""
    return [{"emailAddress": {"address": a}} for a in (addresses or [])]


def split_addresses(value: Optional[str]) -> List[str]:
    """Split a comma-separated address list, trimming and dropping empties."""
    return [part.strip() for part in (value or "").split(",") if part.strip()]


@dataclass
class MailParams:
    """A message to send from the signed-in mailbox."""

    to: List[str]
    subject: str
    body: str
    cc: List[str] = field(default_factory=list)
    bcc: List[str] = field(default_factory=list)
    html: bool = False
    save_to_sent_items: bool = True

    @property
    def content_type(self) -> str:
        return "HTML" if self.html else "Text"

    def to_payload(self) -> Dict[str, Any]:
        message: Dict[str, Any] = {
            "subject": self.subject,
            "body": {"contentType": self.content_type, "content": self.body},
            "toRecipients": recipients(self.to),
        }
        if self.cc:
            message["ccRecipients"] = recipients(self.cc)
        if self.bcc:
            message["bccRecipients"] = recipients(self.bcc)
        return {"message": message, "saveToSentItems": self.save_to_sent_items}


@dataclass
class TimeRange:
    """Wall-clock range in a named time zone, as Graph's dateTimeTimeZone pair."""

    start_iso: str
    end_iso: str
    tz: str

    def to_graph(self) -> Dict[str, Dict[str, str]]:
        return {
            "start": {"dateTime": self.start_iso, "timeZone": self.tz},
            "end": {"dateTime": self.end_iso, "timeZone": self.tz},
        }
