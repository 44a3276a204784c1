"""Send pipeline: validate recipients, convert the body, hand off to Graph."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.cli_errors import UsageError
from core.outlook import MailParams
from core.pipeline import BaseProducer, SafeProcessor

from .markdown import markdown_to_html


@dataclass
class SendRequest:
    client: Any
    to: List[str]
    subject: str
    body: str
    cc: List[str] = field(default_factory=list)
    bcc: List[str] = field(default_factory=list)
    html: bool = False
    markdown: bool = False
    dry_run: bool = False


@dataclass
class SendResult:
    params: MailParams
    dry_run: bool = False


def build_mail_params(payload: SendRequest) -> MailParams:
    """MailParams for a request; markdown wins over --html and always sends HTML."""
    if not payload.to:
        raise UsageError("At least one recipient is required.", hint="Pass --to with one or more addresses.")
    body = payload.body
    html = payload.html
    if payload.markdown:
        body = markdown_to_html(payload.body)
        html = True
    return MailParams(
        to=list(payload.to),
        subject=payload.subject,
        body=body,
        cc=list(payload.cc),
        bcc=list(payload.bcc),
        html=html,
    )


class SendProcessor(SafeProcessor[SendRequest, SendResult]):
    def _process_safe(self, payload: SendRequest) -> SendResult:
        params = build_mail_params(payload)
        if not payload.dry_run:
            payload.client.send_mail(params)
        return SendResult(params=params, dry_run=payload.dry_run)


class SendProducer(BaseProducer):
    def _produce_success(self, payload: SendResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        params = payload.params
        if self.writer.structured:
            data: Dict[str, Any] = {"success": True, "to": params.to, "subject": params.subject}
            if payload.dry_run:
                data["dry_run"] = True
            self.writer.print_data(data)
            return
        verb = "Would send email to" if payload.dry_run else "✓ Email sent to"
        self.writer.print(f"\n{verb} {', '.join(params.to)}")
        self.writer.print(f"  Subject: {params.subject}\n")
        self.writer.print_verbose(f"  Body type: {params.content_type}")
