"""Shared test fixtures and utilities.

This module provides common fakes, stubs, and helpers to simplify testing
across the outlook-assistant test suite.
"""

from __future__ import annotations

import datetime as _dt
import io
import tempfile
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from pathlib import Path
from types import SimpleNamespace
from typing import Dict, Optional

from core.cli_output import OutputConfig, OutputFormat, OutputWriter

REPO_ROOT = Path(__file__).resolve().parents[1]


# -----------------------------------------------------------------------------
# Path helpers
# -----------------------------------------------------------------------------


def repo_root() -> Path:
    return REPO_ROOT


# -----------------------------------------------------------------------------
# Output capture helpers
# -----------------------------------------------------------------------------


@contextmanager
def capture_stdout():
    """Context manager that captures stdout and yields a StringIO buffer."""
    buf = io.StringIO()
    with redirect_stdout(buf):
        yield buf


@contextmanager
def capture_output():
    """Capture stdout and stderr; yields (out, err) StringIO buffers."""
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        yield out, err


def make_writer(fmt: str = "text", verbose: bool = False, quiet: bool = False) -> OutputWriter:
    """OutputWriter writing to the current sys.stdout (so capture_stdout sees it)."""
    return OutputWriter(OutputConfig(format=OutputFormat(fmt), verbose=verbose, quiet=quiet))


def make_args(**kwargs) -> SimpleNamespace:
    """Create a SimpleNamespace with common CLI arg defaults merged with kwargs."""
    defaults = {
        "profile": None,
        "client_id": None,
        "tenant": None,
        "token": None,
        "access_token": None,
        "timezone": None,
        "dry_run": False,
        "verbose": False,
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


# -----------------------------------------------------------------------------
# Calendar event helpers
# -----------------------------------------------------------------------------

DAY = _dt.date(2024, 1, 1)


def at(hour: int, minute: int = 0, day: _dt.date = DAY) -> _dt.datetime:
    """Naive wall-clock datetime on ``day``."""
    return _dt.datetime.combine(day, _dt.time(hour, minute))


def make_outlook_event(
    subject: str,
    start_iso: str,
    end_iso: str,
    event_id: Optional[str] = None,
    show_as: str = "busy",
    location: Optional[str] = None,
    is_organizer: bool = True,
    is_cancelled: bool = False,
) -> Dict:
    """Create a fake Graph calendarView event dict for testing."""
    event = {
        "id": event_id or f"evt-{subject.lower().replace(' ', '-')}",
        "subject": subject,
        "start": {"dateTime": start_iso, "timeZone": "UTC"},
        "end": {"dateTime": end_iso, "timeZone": "UTC"},
        "showAs": show_as,
        "isOrganizer": is_organizer,
        "isCancelled": is_cancelled,
    }
    if location:
        event["location"] = {"displayName": location}
    return event


# -----------------------------------------------------------------------------
# Temp directory helpers
# -----------------------------------------------------------------------------


class TempDirMixin:
    """Mixin providing a temporary directory that's cleaned up after each test.

    Usage:
        class MyTest(TempDirMixin, unittest.TestCase):
            def test_something(self):
                path = os.path.join(self.tmpdir, "file.txt")
                ...
    """

    tmpdir: str

    def setUp(self):
        super().setUp()
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        import shutil
        shutil.rmtree(self.tmpdir, ignore_errors=True)
        super().tearDown()
