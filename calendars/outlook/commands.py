"""Outlook calendar command implementations."""
from __future__ import annotations

import argparse
from typing import Any, Optional, Tuple

from core.auth import build_outlook_client, settings_from_args
from core.config_resolver import OutlookSettings
from core.date_utils import parse_day
from core.outlook import split_addresses
from core.pipeline import run_pipeline

from ..outlook_pipelines import (
    DeleteEventProcessor,
    DeleteEventProducer,
    DeleteEventRequest,
    FreeBusyProcessor,
    FreeBusyProducer,
    FreeBusyRequest,
    ScheduleProcessor,
    ScheduleProducer,
    ScheduleRequest,
)


def _outlook_client(args: argparse.Namespace) -> Tuple[Any, OutlookSettings]:
    """Resolve settings and return an authenticated client; AuthError propagates."""
    settings = settings_from_args(args)
    client = build_outlook_client(settings)
    client.authenticate()
    return client, settings


def _hours(args: argparse.Namespace, settings: OutlookSettings) -> Tuple[Any, Any]:
    start = getattr(args, "start", None)
    end = getattr(args, "end", None)
    return (
        settings.work_start if start is None else start,
        settings.work_end if end is None else end,
    )


def _writer(args: argparse.Namespace):
    return getattr(args, "_output", None)


def run_freebusy(args: argparse.Namespace) -> int:
    client, settings = _outlook_client(args)
    work_start, work_end = _hours(args, settings)
    request = FreeBusyRequest(
        client=client,
        day=parse_day(getattr(args, "day", None)),
        work_start=work_start,
        work_end=work_end,
        free=bool(getattr(args, "free", False)),
    )
    return run_pipeline(request, FreeBusyProcessor, FreeBusyProducer, _writer(args))


def run_schedule(args: argparse.Namespace) -> int:
    client, settings = _outlook_client(args)
    work_start, work_end = _hours(args, settings)
    interval: Optional[int] = getattr(args, "interval", None)
    request = ScheduleRequest(
        client=client,
        addresses=split_addresses(getattr(args, "emails", "")),
        day=parse_day(getattr(args, "day", None)),
        work_start=work_start,
        work_end=work_end,
        free=bool(getattr(args, "free", False)),
        interval=settings.bucket_minutes if interval is None else interval,
    )
    return run_pipeline(request, ScheduleProcessor, ScheduleProducer, _writer(args))


def run_delete_event(args: argparse.Namespace) -> int:
    client, _ = _outlook_client(args)
    request = DeleteEventRequest(
        client=client,
        day=parse_day(getattr(args, "day", None)),
        search=getattr(args, "search", None),
        index=getattr(args, "index", None),
        dry_run=bool(getattr(args, "dry_run", False)),
    )
    return run_pipeline(request, DeleteEventProcessor, DeleteEventProducer, _writer(args))
