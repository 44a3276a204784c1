"""Shared helpers and constants for Outlook calendar pipelines."""

from __future__ import annotations

import datetime as _dt
from typing import Any

from availability import WorkWindow
from core.cli_errors import UsageError
from core.cli_output import OutputFormat, OutputWriter
from core.date_utils import to_iso_str

# Log prefixes
LOG_DRY_RUN = "[dry-run]"

RULE_WIDTH_EVENTS = 60


def build_work_window(day: _dt.date, start_hour: Any, end_hour: Any) -> WorkWindow:
    """WorkWindow from raw CLI hour values; bad hours are a usage error."""
    try:
        return WorkWindow(day=day, start_hour=int(start_hour), end_hour=int(end_hour))
    except (TypeError, ValueError) as exc:
        raise UsageError(str(exc), hint="Use --start/--end hours with start before end, e.g. --start 9 --end 17.")


def window_iso(window: WorkWindow):
    """(start_iso, end_iso) strings for a work window."""
    return to_iso_str(window.start), to_iso_str(window.end)


def wants_records(writer: OutputWriter) -> bool:
    """True for any output format other than the text report."""
    return writer.config.format != OutputFormat.TEXT


__all__ = [
    "LOG_DRY_RUN",
    "RULE_WIDTH_EVENTS",
    "build_work_window",
    "window_iso",
    "wants_records",
]
