"""Base Outlook client: MSAL authentication and Graph request plumbing."""

from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Callable, Dict, List, Optional

from core.cli_errors import (
    LOGIN_HINT,
    AuthError,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
)
from core.constants import (
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TENANT,
    DEFAULT_TIMEZONE,
    GRAPH_API_SCOPES,
    GRAPH_API_URL,
)

LOG = logging.getLogger(__name__)

# Lazy optional deps: avoid importing on --help to prevent warnings/overhead
msal = None  # type: ignore
requests = None  # type: ignore

GRAPH = GRAPH_API_URL


def _msal():  # type: ignore
    global msal
    if msal is None:  # pragma: no cover - optional import
        import msal as _msal  # type: ignore
        msal = _msal
    return msal


class _TimeoutRequestsWrapper:
    """Wrapper around requests module that adds default timeout to all calls."""

    def __init__(self, requests_module, default_timeout):
        self._requests = requests_module
        self._timeout = default_timeout

    def get(self, url, **kwargs):
        kwargs.setdefault("timeout", self._timeout)
        return self._requests.get(url, **kwargs)

    def post(self, url, **kwargs):
        kwargs.setdefault("timeout", self._timeout)
        return self._requests.post(url, **kwargs)

    def delete(self, url, **kwargs):
        kwargs.setdefault("timeout", self._timeout)
        return self._requests.delete(url, **kwargs)


_requests_wrapper = None  # type: ignore


def _requests():  # type: ignore
    """Return requests module wrapped with default timeout."""
    global requests, _requests_wrapper
    if _requests_wrapper is None:  # pragma: no cover - optional import
        import requests as _req  # type: ignore
        requests = _req
        _requests_wrapper = _TimeoutRequestsWrapper(_req, DEFAULT_REQUEST_TIMEOUT)
    return _requests_wrapper


def graph_error_message(resp: Any) -> str:
    """Pull the human message out of a Graph error body, else the HTTP status."""
    try:
        data = resp.json() or {}
    except ValueError:
        data = {}
    err = data.get("error") if isinstance(data, dict) else None
    if isinstance(err, dict):
        msg = err.get("message") or err.get("code")
        if msg:
            return str(msg)
    return f"HTTP {getattr(resp, 'status_code', '?')}"


def raise_for_graph_status(resp: Any, action: str) -> None:
    """Translate a failed Graph response into the matching CLIError."""
    status = int(getattr(resp, "status_code", 0) or 0)
    if status < 400:
        return
    message = f"{action} failed: {graph_error_message(resp)}"
    if status == 401:
        raise AuthError(message, hint=LOGIN_HINT)
    if status == 403:
        raise PermissionDeniedError(message, hint="The signed-in account lacks access to this resource.")
    if status == 404:
        raise NotFoundError(message)
    raise NetworkError(message)


def _stderr_prompt(message: str) -> None:
    print(message, file=sys.stderr)


class OutlookClientBase:
    """Base Microsoft Graph client with authentication and request helpers.

    Provides:
    - MSAL device flow authentication with a persisted token cache
    - A raw bearer-token mode that skips MSAL entirely
    - Graph calls with HTTP failures mapped onto CLIError subclasses
    - Mailbox time zone lookup for wall-clock calendar queries
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        tenant: str = DEFAULT_TENANT,
        token_path: Optional[str] = None,
        *,
        access_token: Optional[str] = None,
        timezone: Optional[str] = None,
    ) -> None:
        self.client_id = client_id
        self.tenant = tenant or DEFAULT_TENANT
        self.token_path = token_path
        self.access_token = access_token
        self.timezone = timezone
        self._token: Optional[Dict[str, Any]] = None
        self._cache: Optional["msal.SerializableTokenCache"] = None
        self._app: Optional["msal.PublicClientApplication"] = None
        self._scopes: List[str] = list(GRAPH_API_SCOPES)
        self._resolved_tz: Optional[str] = None
        self.GRAPH = GRAPH

    # -------------------- Auth --------------------
    @property
    def authority(self) -> str:
        return f"https://login.microsoftonline.com/{self.tenant}"

    def _load_cache(self) -> "msal.SerializableTokenCache":
        cache = _msal().SerializableTokenCache()
        if self.token_path and os.path.exists(self.token_path):
            try:
                with open(self.token_path, "r", encoding="utf-8") as fh:
                    cache.deserialize(fh.read())
            except (OSError, ValueError) as exc:
                LOG.warning("Ignoring unreadable token cache %s: %s", self.token_path, exc)
        return cache

    def _save_cache(self) -> None:
        if not (self._cache and self.token_path):
            return
        if not getattr(self._cache, "has_state_changed", True):
            return
        d = os.path.dirname(self.token_path)
        if d:
            os.makedirs(d, exist_ok=True)
        with open(self.token_path, "w", encoding="utf-8") as fh:
            fh.write(self._cache.serialize())

    def _store_result(self, result: Dict[str, Any]) -> None:
        self._token = {
            "access_token": result["access_token"],
            "expires_at": time.time() + int(result.get("expires_in", 3600)),
        }

    def _acquire_silent(self) -> Optional[Dict[str, Any]]:
        if self._app is None:
            return None
        accts = self._app.get_accounts()
        if not accts:
            return None
        result = self._app.acquire_token_silent(self._scopes, account=accts[0])
        if result and "access_token" in result:
            return result
        return None

    def authenticate(
        self,
        *,
        interactive: bool = False,
        prompt: Optional[Callable[[str], None]] = None,
    ) -> None:
        """Obtain an access token.

        Uses the raw access token when one was given; otherwise tries the
        MSAL cache silently and, only when ``interactive``, falls back to the
        device code flow. Raises AuthError when no token can be obtained.
        """
        if self.access_token:
            self._token = {"access_token": self.access_token, "expires_at": float("inf")}
            return
        if not self.client_id:
            raise AuthError(
                "No Outlook client_id configured",
                hint="Pass --client-id, set OUTLOOK_ASSISTANT_CLIENT_ID, or add client_id under [outlook] in credentials.ini.",
            )

        self._cache = self._load_cache()
        self._app = _msal().PublicClientApplication(
            self.client_id,
            authority=self.authority,
            token_cache=self._cache,
        )
        result = self._acquire_silent()
        if result is None:
            if not interactive:
                raise AuthError("Not signed in to Outlook", hint=LOGIN_HINT)
            result = self._device_flow(prompt or _stderr_prompt)
        self._store_result(result)
        self._save_cache()

    def _device_flow(self, prompt: Callable[[str], None]) -> Dict[str, Any]:
        flow = self._app.initiate_device_flow(scopes=self._scopes)
        if "user_code" not in flow:
            raise AuthError(f"Failed to start device flow: {flow.get('error_description') or flow}")
        prompt(flow.get("message") or f"To sign in, visit {flow['verification_uri']} and enter code: {flow['user_code']}")
        result = self._app.acquire_token_by_device_flow(flow)
        if "access_token" not in result:
            raise AuthError(
                f"Device flow failed: {result.get('error_description') or result.get('error') or result}",
                hint=LOGIN_HINT,
            )
        return result

    def _headers(self) -> Dict[str, str]:
        if not self._token:
            raise AuthError("OutlookClient not authenticated", hint=LOGIN_HINT)
        if self._token.get("expires_at", 0) - 60 < time.time():
            result = self._acquire_silent()
            if result is None:
                raise AuthError("Outlook session expired", hint=LOGIN_HINT)
            self._store_result(result)
            self._save_cache()
        return {
            "Authorization": f"Bearer {self._token['access_token']}",
            "Content-Type": "application/json",
        }

    # -------------------- Requests --------------------
    def _request(
        self,
        method: str,
        url: str,
        *,
        action: str,
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> Any:
        """Issue one Graph call; connection and HTTP failures become CLIErrors."""
        from requests import RequestException

        h = self._headers()
        if headers:
            h.update(headers)
        LOG.debug("%s %s", method.upper(), url)
        try:
            resp = getattr(_requests(), method)(url, headers=h, **kwargs)
        except RequestException as exc:
            raise NetworkError(f"{action} failed: {exc}", hint="Check your network connection.") from exc
        LOG.debug("%s %s -> %s", method.upper(), url, resp.status_code)
        raise_for_graph_status(resp, action)
        return resp

    def _json(self, method: str, url: str, *, action: str, **kwargs: Any) -> Dict[str, Any]:
        resp = self._request(method, url, action=action, **kwargs)
        try:
            return resp.json() or {}
        except ValueError:
            raise NetworkError(f"{action} failed: response was not JSON")

    def _timezone_header(self) -> Dict[str, str]:
        return {"Prefer": f'outlook.timezone="{self.resolve_timezone()}"'}

    # -------------------- Mailbox settings --------------------
    def get_mailbox_timezone(self) -> Optional[str]:
        try:
            data = self._json("get", f"{GRAPH}/me/mailboxSettings", action="Read mailbox settings")
        except (NetworkError, NotFoundError, PermissionDeniedError) as exc:
            LOG.debug("Mailbox time zone unavailable: %s", exc)
            return None
        tz = (data.get("timeZone") or "").strip()
        return tz or None

    def resolve_timezone(self) -> str:
        """Configured time zone, else the mailbox's, else UTC; looked up once."""
        if self.timezone and self.timezone.strip():
            return self.timezone.strip()
        if self._resolved_tz is None:
            self._resolved_tz = self.get_mailbox_timezone() or DEFAULT_TIMEZONE
        return self._resolved_tz
