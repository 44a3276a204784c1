"""INI + environment configuration for the Outlook assistant.

Settings live in ``credentials.ini`` under ``[outlook]``, with per-profile
overrides in ``[outlook.<profile>]``. Environment variables beat the INI,
and explicit CLI values beat both.
"""
from __future__ import annotations

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from .cli_errors import ConfigError
from .constants import (
    DEFAULT_BUCKET_MINUTES,
    DEFAULT_TENANT,
    DEFAULT_WORK_END,
    DEFAULT_WORK_START,
    _config_roots,
    credential_ini_paths,
)

LOG = logging.getLogger(__name__)

_SECTION = "outlook"
_ENV_PREFIX = "OUTLOOK_ASSISTANT_"
DEFAULT_OUTLOOK_TOKEN = os.path.join(_config_roots()[0], "outlook_token.json")


def expand_path(path: Optional[str]) -> Optional[str]:
    if not path:
        return path
    return os.path.expanduser(path)


def _read_ini() -> Dict[str, Dict[str, str]]:
    merged_sections: Dict[str, Dict[str, str]] = {}
    # Earlier paths win; later ones only fill missing keys
    for p in credential_ini_paths():
        if not os.path.exists(p):
            continue
        cp = configparser.ConfigParser()
        try:
            cp.read(p, encoding="utf-8")
        except configparser.Error as exc:
            LOG.warning("ignoring unreadable config %s: %s", p, exc)
            continue
        for section in cp.sections():
            sec = merged_sections.setdefault(section, {})
            for k, v in cp.items(section):
                sec.setdefault(k, v)
    return merged_sections


def get_ini_section(profile: Optional[str] = None) -> Dict[str, str]:
    """Return ``[outlook]`` overlaid with ``[outlook.<profile>]`` when present."""
    ini = _read_ini()
    merged = dict(ini.get(_SECTION, {}))
    if profile:
        merged.update(ini.get(f"{_SECTION}.{profile}", {}))
    return merged


def _env(name: str, environ: Mapping[str, str]) -> Optional[str]:
    return environ.get(_ENV_PREFIX + name) or None


def _int_setting(key: str, raw: Optional[str], default: int) -> int:
    if raw in (None, ""):
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        raise ConfigError(f"Invalid {key} value: {raw!r}", hint="Expected a whole number.")


@dataclass
class OutlookSettings:
    """Resolved configuration for one invocation."""

    client_id: Optional[str] = None
    tenant: str = DEFAULT_TENANT
    token_path: str = DEFAULT_OUTLOOK_TOKEN
    access_token: Optional[str] = None
    timezone: Optional[str] = None
    work_start: int = DEFAULT_WORK_START
    work_end: int = DEFAULT_WORK_END
    bucket_minutes: int = DEFAULT_BUCKET_MINUTES
    profile: Optional[str] = None


def resolve_settings(
    profile: Optional[str] = None,
    *,
    client_id: Optional[str] = None,
    tenant: Optional[str] = None,
    token_path: Optional[str] = None,
    access_token: Optional[str] = None,
    timezone: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> OutlookSettings:
    """Fold CLI values over environment, INI profile and defaults.

    Raises ConfigError when a numeric setting does not parse.
    """
    env = os.environ if environ is None else environ
    sec = get_ini_section(profile)
    return OutlookSettings(
        client_id=client_id or _env("CLIENT_ID", env) or sec.get("client_id"),
        tenant=tenant or _env("TENANT", env) or sec.get("tenant") or DEFAULT_TENANT,
        token_path=expand_path(token_path or _env("TOKEN", env) or sec.get("token") or DEFAULT_OUTLOOK_TOKEN),
        access_token=access_token or _env("ACCESS_TOKEN", env),
        timezone=timezone or _env("TIMEZONE", env) or sec.get("timezone"),
        work_start=_int_setting("work_start", sec.get("work_start"), DEFAULT_WORK_START),
        work_end=_int_setting("work_end", sec.get("work_end"), DEFAULT_WORK_END),
        bucket_minutes=_int_setting("bucket_minutes", sec.get("bucket_minutes"), DEFAULT_BUCKET_MINUTES),
        profile=profile,
    )


def persist_profile_settings(
    *,
    profile: Optional[str] = None,
    client_id: Optional[str] = None,
    tenant: Optional[str] = None,
    token_path: Optional[str] = None,
) -> str:
    """Write the provided values to the INI file; returns the path written.

    Only non-empty values are written; other keys are left unchanged.
    """
    paths = credential_ini_paths()
    dest = next((p for p in paths if os.path.exists(p)), paths[0])
    cp = configparser.ConfigParser()
    if os.path.exists(dest):
        cp.read(dest, encoding="utf-8")
    section = f"{_SECTION}.{profile}" if profile else _SECTION
    if not cp.has_section(section):
        cp.add_section(section)
    for key, value in (("client_id", client_id), ("tenant", tenant), ("token", token_path)):
        if value:
            cp.set(section, key, str(value))
    Path(os.path.dirname(dest)).mkdir(parents=True, exist_ok=True)
    with open(dest, "w", encoding="utf-8") as fh:
        cp.write(fh)
    return dest
