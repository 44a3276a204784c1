"""Mail command implementations."""
from __future__ import annotations

import argparse

from core.auth import build_outlook_client, settings_from_args
from core.outlook import split_addresses
from core.pipeline import run_pipeline

from .send_pipeline import SendProcessor, SendProducer, SendRequest


def run_send(args: argparse.Namespace) -> int:
    client = build_outlook_client(settings_from_args(args))
    dry_run = bool(getattr(args, "dry_run", False))
    if not dry_run:
        client.authenticate()
    request = SendRequest(
        client=client,
        to=split_addresses(getattr(args, "to", "")),
        subject=args.subject,
        body=args.body,
        cc=split_addresses(getattr(args, "cc", None)),
        bcc=split_addresses(getattr(args, "bcc", None)),
        html=bool(getattr(args, "html", False)),
        markdown=bool(getattr(args, "markdown", False)),
        dry_run=dry_run,
    )
    return run_pipeline(request, SendProcessor, SendProducer, getattr(args, "_output", None))
