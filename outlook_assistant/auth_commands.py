"""Login command: device-code sign-in and token cache persistence."""
from __future__ import annotations

import argparse
import dataclasses

from core.auth import build_outlook_client, settings_from_args
from core.cli_output import OutputWriter
from core.config_resolver import persist_profile_settings


def run_login(args: argparse.Namespace) -> int:
    settings = settings_from_args(args)
    # A raw token would short-circuit sign-in
    settings = dataclasses.replace(settings, access_token=None)
    writer: OutputWriter = getattr(args, "_output", None) or OutputWriter()

    client = build_outlook_client(settings)
    client.authenticate(interactive=True)

    saved_to = None
    if getattr(args, "client_id", None) or getattr(args, "tenant", None):
        saved_to = persist_profile_settings(
            profile=settings.profile,
            client_id=getattr(args, "client_id", None),
            tenant=getattr(args, "tenant", None),
        )

    if writer.structured:
        data = {"success": True, "token_path": settings.token_path}
        if saved_to:
            data["config_path"] = saved_to
        writer.print_data(data)
        return 0
    writer.print(f"✓ Signed in. Token cache: {settings.token_path}")
    if saved_to:
        writer.print(f"  Saved client settings to {saved_to}")
    return 0
