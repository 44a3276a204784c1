"""Tests for core/outlook/client.py base client functionality."""

from __future__ import annotations

import json
import os
import time
import unittest
from unittest.mock import MagicMock, patch

import requests

from core.cli_errors import AuthError, ExitCode, NetworkError, NotFoundError, PermissionDeniedError
from core.outlook.client import (
    GRAPH,
    OutlookClientBase,
    _TimeoutRequestsWrapper,
    graph_error_message,
    raise_for_graph_status,
)
from tests.fixtures import TempDirMixin


# -------------------- Fixtures --------------------

def make_mock_response(json_data=None, status_code=200):
    """Create a mock HTTP response object."""
    resp = MagicMock()
    resp.status_code = status_code
    if isinstance(json_data, Exception):
        resp.json.side_effect = json_data
    else:
        resp.json.return_value = json_data
    return resp


def authed_client(**kwargs) -> OutlookClientBase:
    client = OutlookClientBase(client_id="cid", **kwargs)
    client._token = {"access_token": "tok", "expires_at": time.time() + 3600}
    return client


# -------------------- TimeoutRequestsWrapper Tests --------------------

class TestTimeoutRequestsWrapper(unittest.TestCase):
    """Tests for _TimeoutRequestsWrapper."""

    def setUp(self):
        self.mock_requests = MagicMock()
        self.wrapper = _TimeoutRequestsWrapper(self.mock_requests, 30)

    def test_get_adds_default_timeout(self):
        self.wrapper.get("https://example.com")
        self.mock_requests.get.assert_called_once_with("https://example.com", timeout=30)

    def test_get_respects_custom_timeout(self):
        self.wrapper.get("https://example.com", timeout=60)
        self.mock_requests.get.assert_called_once_with("https://example.com", timeout=60)

    def test_post_adds_default_timeout(self):
        self.wrapper.post("https://example.com", json={"key": "value"})
        self.mock_requests.post.assert_called_once_with(
            "https://example.com", json={"key": "value"}, timeout=30
        )

    def test_delete_adds_default_timeout(self):
        self.wrapper.delete("https://example.com")
        self.mock_requests.delete.assert_called_once_with("https://example.com", timeout=30)


# -------------------- Graph error mapping --------------------

class TestGraphErrors(unittest.TestCase):
    """HTTP status -> CLIError translation."""

    def test_message_from_error_body(self):
        resp = make_mock_response({"error": {"code": "X", "message": "Mailbox not found"}}, 404)
        self.assertEqual(graph_error_message(resp), "Mailbox not found")

    def test_message_falls_back_to_code(self):
        resp = make_mock_response({"error": {"code": "ErrorAccessDenied"}}, 403)
        self.assertEqual(graph_error_message(resp), "ErrorAccessDenied")

    def test_message_falls_back_to_status(self):
        resp = make_mock_response(ValueError("not json"), 502)
        self.assertEqual(graph_error_message(resp), "HTTP 502")

    def test_success_does_not_raise(self):
        raise_for_graph_status(make_mock_response({}, 202), "Send mail")

    def test_401_is_auth_error_with_login_hint(self):
        with self.assertRaises(AuthError) as ctx:
            raise_for_graph_status(make_mock_response({}, 401), "Get schedule")
        self.assertEqual(ctx.exception.code, ExitCode.AUTH_ERROR)
        self.assertIn("login", ctx.exception.hint)
        self.assertTrue(ctx.exception.message.startswith("Get schedule failed:"))

    def test_403_is_permission_denied(self):
        with self.assertRaises(PermissionDeniedError):
            raise_for_graph_status(make_mock_response({}, 403), "Delete event")

    def test_404_is_not_found(self):
        with self.assertRaises(NotFoundError):
            raise_for_graph_status(make_mock_response({}, 404), "Delete event")

    def test_other_failures_are_network_errors(self):
        for status in (400, 429, 500, 503):
            with self.subTest(status=status):
                with self.assertRaises(NetworkError):
                    raise_for_graph_status(make_mock_response({}, status), "List calendar events")


# -------------------- Authentication --------------------

class TestAuthenticate(TempDirMixin, unittest.TestCase):
    """Tests for OutlookClientBase.authenticate."""

    def _fake_msal(self, *, accounts=None, silent=None, flow=None, device_result=None):
        msal = MagicMock()
        cache = msal.SerializableTokenCache.return_value
        cache.serialize.return_value = '{"cache": true}'
        cache.has_state_changed = True
        app = msal.PublicClientApplication.return_value
        app.get_accounts.return_value = accounts or []
        app.acquire_token_silent.return_value = silent
        app.initiate_device_flow.return_value = flow or {}
        app.acquire_token_by_device_flow.return_value = device_result or {}
        return msal, app

    def test_access_token_skips_msal(self):
        client = OutlookClientBase(access_token="raw")
        with patch("core.outlook.client._msal") as m:
            client.authenticate()
        m.assert_not_called()
        self.assertEqual(client._headers()["Authorization"], "Bearer raw")

    def test_missing_client_id_is_auth_error(self):
        with self.assertRaises(AuthError) as ctx:
            OutlookClientBase().authenticate()
        self.assertIn("client_id", ctx.exception.message)

    def test_silent_token_from_cache(self):
        msal, app = self._fake_msal(accounts=[{"username": "me"}], silent={"access_token": "cached", "expires_in": 3600})
        token_path = os.path.join(self.tmpdir, "nested", "token.json")
        client = OutlookClientBase(client_id="cid", tenant="organizations", token_path=token_path)
        with patch("core.outlook.client._msal", return_value=msal):
            client.authenticate()
        msal.PublicClientApplication.assert_called_once()
        self.assertEqual(
            msal.PublicClientApplication.call_args.kwargs["authority"],
            "https://login.microsoftonline.com/organizations",
        )
        app.initiate_device_flow.assert_not_called()
        self.assertEqual(client._headers()["Authorization"], "Bearer cached")
        with open(token_path, encoding="utf-8") as fh:
            self.assertEqual(json.load(fh), {"cache": True})

    def test_no_cached_account_non_interactive_raises(self):
        msal, app = self._fake_msal()
        client = OutlookClientBase(client_id="cid")
        with patch("core.outlook.client._msal", return_value=msal):
            with self.assertRaises(AuthError) as ctx:
                client.authenticate()
        self.assertEqual(ctx.exception.message, "Not signed in to Outlook")
        app.initiate_device_flow.assert_not_called()

    def test_interactive_runs_device_flow(self):
        msal, app = self._fake_msal(
            flow={"user_code": "ABC", "verification_uri": "https://microsoft.com/devicelogin", "message": "Go sign in"},
            device_result={"access_token": "fresh", "expires_in": 60 * 60},
        )
        prompts = []
        client = OutlookClientBase(client_id="cid")
        with patch("core.outlook.client._msal", return_value=msal):
            client.authenticate(interactive=True, prompt=prompts.append)
        self.assertEqual(prompts, ["Go sign in"])
        self.assertEqual(client._token["access_token"], "fresh")

    def test_device_flow_start_failure(self):
        msal, _ = self._fake_msal(flow={"error_description": "bad client"})
        client = OutlookClientBase(client_id="cid")
        with patch("core.outlook.client._msal", return_value=msal):
            with self.assertRaises(AuthError) as ctx:
                client.authenticate(interactive=True, prompt=lambda _m: None)
        self.assertIn("bad client", ctx.exception.message)

    def test_device_flow_rejected(self):
        msal, _ = self._fake_msal(
            flow={"user_code": "ABC", "verification_uri": "u"},
            device_result={"error": "authorization_declined"},
        )
        client = OutlookClientBase(client_id="cid")
        with patch("core.outlook.client._msal", return_value=msal):
            with self.assertRaises(AuthError) as ctx:
                client.authenticate(interactive=True, prompt=lambda _m: None)
        self.assertIn("authorization_declined", ctx.exception.message)

    def test_unauthenticated_headers_raise(self):
        with self.assertRaises(AuthError):
            OutlookClientBase(client_id="cid")._headers()


# -------------------- Requests --------------------

class TestRequest(unittest.TestCase):
    """Tests for _request/_json plumbing."""

    def setUp(self):
        self.http = MagicMock()
        patcher = patch("core.outlook.client._requests", return_value=self.http)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_sends_bearer_and_extra_headers(self):
        self.http.get.return_value = make_mock_response({"ok": True})
        client = authed_client()
        data = client._json("get", f"{GRAPH}/me", action="Read", headers={"Prefer": "x"})
        self.assertEqual(data, {"ok": True})
        headers = self.http.get.call_args.kwargs["headers"]
        self.assertEqual(headers["Authorization"], "Bearer tok")
        self.assertEqual(headers["Prefer"], "x")

    def test_connection_failure_is_network_error(self):
        self.http.get.side_effect = requests.ConnectionError("refused")
        with self.assertRaises(NetworkError) as ctx:
            authed_client()._request("get", f"{GRAPH}/me", action="Read")
        self.assertIn("refused", ctx.exception.message)

    def test_http_failure_is_mapped(self):
        self.http.delete.return_value = make_mock_response({"error": {"message": "gone"}}, 404)
        with self.assertRaises(NotFoundError) as ctx:
            authed_client()._request("delete", f"{GRAPH}/me/events/1", action="Delete event")
        self.assertEqual(ctx.exception.message, "Delete event failed: gone")

    def test_non_json_body_is_network_error(self):
        self.http.get.return_value = make_mock_response(ValueError("bad"), 200)
        with self.assertRaises(NetworkError):
            authed_client()._json("get", f"{GRAPH}/me", action="Read")

    def test_expired_token_without_account_raises(self):
        client = authed_client()
        client._token["expires_at"] = time.time() - 10
        with self.assertRaises(AuthError):
            client._request("get", f"{GRAPH}/me", action="Read")


# -------------------- Time zone --------------------

class TestResolveTimezone(unittest.TestCase):
    """Configured time zone, then the mailbox setting, then UTC."""

    def setUp(self):
        self.http = MagicMock()
        patcher = patch("core.outlook.client._requests", return_value=self.http)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_configured_timezone_wins(self):
        client = authed_client(timezone=" Europe/London ")
        self.assertEqual(client.resolve_timezone(), "Europe/London")
        self.http.get.assert_not_called()

    def test_mailbox_timezone_is_looked_up_once(self):
        self.http.get.return_value = make_mock_response({"timeZone": "Pacific Standard Time"})
        client = authed_client()
        self.assertEqual(client.resolve_timezone(), "Pacific Standard Time")
        self.assertEqual(client.resolve_timezone(), "Pacific Standard Time")
        self.assertEqual(self.http.get.call_count, 1)
        self.assertTrue(self.http.get.call_args.args[0].endswith("/me/mailboxSettings"))

    def test_falls_back_to_utc_when_unreadable(self):
        self.http.get.return_value = make_mock_response({}, 403)
        self.assertEqual(authed_client().resolve_timezone(), "UTC")

    def test_blank_mailbox_timezone_falls_back(self):
        self.http.get.return_value = make_mock_response({"timeZone": ""})
        self.assertEqual(authed_client().resolve_timezone(), "UTC")

    def test_prefer_header(self):
        client = authed_client(timezone="UTC")
        self.assertEqual(client._timezone_header(), {"Prefer": 'outlook.timezone="UTC"'})


if __name__ == "__main__":
    unittest.main()
