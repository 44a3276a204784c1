"""Tests for core/outlook/mail.py."""

from __future__ import annotations

import time
import unittest
from unittest.mock import MagicMock, patch

from core.cli_errors import AuthError
from core.outlook import MailParams, OutlookClient
from core.outlook.client import GRAPH


class TestSendMail(unittest.TestCase):
    def setUp(self):
        self.http = MagicMock()
        patcher = patch("core.outlook.client._requests", return_value=self.http)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.client = OutlookClient(client_id="cid")
        self.client._token = {"access_token": "tok", "expires_at": time.time() + 3600}

    def test_posts_message(self):
        self.http.post.return_value = MagicMock(status_code=202)
        self.client.send_mail(MailParams(to=["a@x.com"], subject="Hi", body="Hello", cc=["c@x.com"]))
        call = self.http.post.call_args
        self.assertEqual(call.args[0], f"{GRAPH}/me/sendMail")
        message = call.kwargs["json"]["message"]
        self.assertEqual(message["subject"], "Hi")
        self.assertEqual(message["body"], {"contentType": "Text", "content": "Hello"})
        self.assertEqual(message["ccRecipients"], [{"emailAddress": {"address": "c@x.com"}}])
        self.assertTrue(call.kwargs["json"]["saveToSentItems"])

    def test_no_recipients_rejected(self):
        with self.assertRaises(ValueError):
            self.client.send_mail(MailParams(to=[], subject="Hi", body=""))
        self.http.post.assert_not_called()

    def test_unauthorized(self):
        resp = MagicMock(status_code=401)
        resp.json.return_value = {"error": {"code": "InvalidAuthenticationToken", "message": "expired"}}
        self.http.post.return_value = resp
        with self.assertRaises(AuthError):
            self.client.send_mail(MailParams(to=["a@x.com"], subject="Hi", body=""))


if __name__ == "__main__":
    unittest.main()
