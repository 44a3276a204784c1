"""CLI argument helpers and help string constants for outlook-assistant."""
from __future__ import annotations

from core.cli_framework import CLIApp

# Help string constants to avoid duplication
HELP_DAY = "Day to check: today, tomorrow, yesterday or YYYY-MM-DD (default: today)"
HELP_WORK_START = "Work day start hour 0-23 (default: 9 or [outlook] work_start)"
HELP_WORK_END = "Work day end hour 1-24 (default: 17 or [outlook] work_end)"
HELP_FREE = "Show free slots within working hours instead of busy times"


def add_outlook_auth_args(app: CLIApp) -> None:
    """Auth/connection flags accepted by every command."""
    app.shared_argument("--client-id", help="Azure app (client) ID; defaults from profile or env")
    app.shared_argument("--tenant", help="AAD tenant (default: consumers)")
    app.shared_argument("--token", help="Path to MSAL token cache JSON")
    app.shared_argument("--access-token", help="Use this bearer token instead of MSAL")
    app.shared_argument("--timezone", help="Time zone for wall-clock times (default: mailbox setting)")
