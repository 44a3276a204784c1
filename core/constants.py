"""Shared constants for the Outlook assistant CLI."""

from __future__ import annotations

import os
from typing import Tuple

# -----------------------------------------------------------------------------
# Credential paths
# -----------------------------------------------------------------------------

APP_DIR_NAME = "outlook-assistant"


def _config_roots() -> list[str]:
    """Return ordered list of config root directories."""
    roots: list[str] = []
    env_cfg = os.environ.get("CREDENTIALS")
    if env_cfg:
        roots.append(os.path.expanduser(os.path.dirname(env_cfg)))
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        roots.append(os.path.expanduser(xdg))
    roots.append(os.path.expanduser("~/.config"))
    return roots


def credential_ini_paths() -> list[str]:
    """Return ordered list of credentials.ini paths to search."""
    paths: list[str] = []

    # Environment override first
    env_creds = os.environ.get("CREDENTIALS")
    if env_creds:
        paths.append(os.path.expanduser(env_creds))

    for root in _config_roots():
        paths.append(os.path.join(root, "credentials.ini"))
        paths.append(os.path.join(root, APP_DIR_NAME, "credentials.ini"))

    # Dedupe while preserving order
    seen: set[str] = set()
    unique: list[str] = []
    for p in paths:
        if p and p not in seen:
            seen.add(p)
            unique.append(p)
    return unique


# -----------------------------------------------------------------------------
# Microsoft Graph API
# -----------------------------------------------------------------------------

GRAPH_API_URL = "https://graph.microsoft.com/v1.0"

GRAPH_API_SCOPES = [
    "Mail.Send",
    "MailboxSettings.Read",
    "Calendars.ReadWrite",
    "Calendars.Read.Shared",
]

DEFAULT_TENANT = "consumers"
DEFAULT_TIMEZONE = "UTC"


# -----------------------------------------------------------------------------
# HTTP and timeouts
# -----------------------------------------------------------------------------

# Default timeout for HTTP requests: (connect_seconds, read_seconds)
DEFAULT_REQUEST_TIMEOUT: Tuple[int, int] = (10, 30)


# -----------------------------------------------------------------------------
# Date/time formats
# -----------------------------------------------------------------------------

FMT_DAY_START = "%Y-%m-%dT00:00:00"
FMT_DATETIME_SEC = "%Y-%m-%dT%H:%M:%S"
FMT_UTC_INSTANT = "%Y-%m-%dT%H:%M:%SZ"

# Widest real UTC offset (Line Islands, +14:00); pads UTC query windows
MAX_UTC_OFFSET_HOURS = 14


# -----------------------------------------------------------------------------
# Availability defaults
# -----------------------------------------------------------------------------

DEFAULT_WORK_START = 9
DEFAULT_WORK_END = 17
DEFAULT_BUCKET_MINUTES = 30
DEFAULT_PAGE_SIZE = 100
