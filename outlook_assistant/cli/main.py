"""Outlook Assistant CLI using CLIApp framework.

Commands:
  freebusy      your busy times (or free slots) for a day
  schedule      other people's busy times (or free slots) for a day
  delete-event  list or delete events you organized
  send          send an email (plain, HTML or markdown)
  login         sign in with the device code flow
"""

from __future__ import annotations

from typing import List, Optional

from core.cli_framework import CLIApp

from calendars.outlook.commands import run_delete_event, run_freebusy, run_schedule
from mail.commands import run_send

from .. import __version__
from ..auth_commands import run_login
from .args import (
    HELP_DAY,
    HELP_FREE,
    HELP_WORK_END,
    HELP_WORK_START,
    add_outlook_auth_args,
)

app = CLIApp(
    "outlook-assistant",
    "Outlook calendar availability and mail from the command line",
    version=__version__,
    epilog=(
        "Examples:\n"
        "  outlook-assistant freebusy tomorrow --free\n"
        "  outlook-assistant schedule alice@example.com,bob@example.com --json\n"
        "  outlook-assistant send --to a@example.com --subject Hi --body '**hello**' --markdown\n"
    ),
)
add_outlook_auth_args(app)


@app.command("freebusy", help="Check your free/busy status for a day")
@app.argument("day", nargs="?", default="today", help=HELP_DAY)
@app.argument("--start", type=int, help=HELP_WORK_START)
@app.argument("--end", type=int, help=HELP_WORK_END)
@app.argument("--free", action="store_true", help=HELP_FREE)
def cmd_freebusy(args) -> int:
    return run_freebusy(args)


@app.command("schedule", help="Check other people's availability for a day")
@app.argument("emails", help="Email address(es), comma-separated")
@app.argument("day", nargs="?", default="today", help=HELP_DAY)
@app.argument("--start", type=int, help=HELP_WORK_START)
@app.argument("--end", type=int, help=HELP_WORK_END)
@app.argument("--free", action="store_true", help=HELP_FREE)
@app.argument("--interval", type=int, help="Availability bucket width in minutes (default: 30)")
def cmd_schedule(args) -> int:
    return run_schedule(args)


@app.command("delete-event", help="Delete a calendar event you organized")
@app.argument("index", nargs="?", type=int, help="Event number from the listing (1-based)")
@app.argument("--day", default="today", help=HELP_DAY)
@app.argument("--search", help="Only events whose subject contains this text")
def cmd_delete_event(args) -> int:
    return run_delete_event(args)


@app.command("send", help="Send an email")
@app.argument("--to", required=True, help="Recipient email(s), comma-separated")
@app.argument("--subject", required=True, help="Email subject")
@app.argument("--body", required=True, help="Email body")
@app.argument("--cc", help="CC recipient(s), comma-separated")
@app.argument("--bcc", help="BCC recipient(s), comma-separated")
@app.argument("--html", action="store_true", help="Send body as HTML")
@app.argument("--markdown", action="store_true", help="Parse body as markdown (bold, links, lists)")
def cmd_send(args) -> int:
    return run_send(args)


@app.command("login", help="Sign in to Outlook and cache the token")
def cmd_login(args) -> int:
    return run_login(args)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the Outlook Assistant CLI."""
    return app.run(argv)


if __name__ == "__main__":
    raise SystemExit(main())
