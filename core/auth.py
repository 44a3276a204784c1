"""Shared auth/context factories for the Outlook client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .config_resolver import OutlookSettings, resolve_settings


@dataclass
class OutlookServiceArgsConfig:
    """Configuration for extracting Outlook service arguments from args object."""

    profile_attr: str = "profile"
    client_id_attr: str = "client_id"
    tenant_attr: str = "tenant"
    token_attr: str = "token"  # noqa: S107 - attribute name, not a secret
    access_token_attr: str = "access_token"  # noqa: S107 - attribute name, not a secret
    timezone_attr: str = "timezone"


def settings_from_args(args: Any, config: Optional[OutlookServiceArgsConfig] = None) -> OutlookSettings:
    """Resolve settings using argparse-like args."""
    cfg = config or OutlookServiceArgsConfig()
    return resolve_settings(
        getattr(args, cfg.profile_attr, None),
        client_id=getattr(args, cfg.client_id_attr, None),
        tenant=getattr(args, cfg.tenant_attr, None),
        token_path=getattr(args, cfg.token_attr, None),
        access_token=getattr(args, cfg.access_token_attr, None),
        timezone=getattr(args, cfg.timezone_attr, None),
    )


def build_outlook_client(settings: OutlookSettings, client_cls=None):
    """Instantiate an unauthenticated OutlookClient from resolved settings."""
    from core.outlook import OutlookClient as DefaultClient

    client_cls = client_cls or DefaultClient
    return client_cls(
        settings.client_id,
        settings.tenant,
        settings.token_path,
        access_token=settings.access_token,
        timezone=settings.timezone,
    )
