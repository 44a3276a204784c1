"""Tests for core/outlook/models.py."""

from __future__ import annotations

import unittest

from core.outlook.models import MailParams, TimeRange, recipients, split_addresses


class TestSplitAddresses(unittest.TestCase):
    def test_trims_and_drops_empties(self):
        self.assertEqual(split_addresses(" a@x.com, ,b@x.com ,"), ["a@x.com", "b@x.com"])

    def test_none_and_blank(self):
        self.assertEqual(split_addresses(None), [])
        self.assertEqual(split_addresses("   "), [])


class TestMailParams(unittest.TestCase):
    def test_text_payload_omits_empty_cc_bcc(self):
        payload = MailParams(to=["a@x.com"], subject="S", body="B").to_payload()
        message = payload["message"]
        self.assertEqual(message["body"]["contentType"], "Text")
        self.assertEqual(message["toRecipients"], recipients(["a@x.com"]))
        self.assertNotIn("ccRecipients", message)
        self.assertNotIn("bccRecipients", message)

    def test_html_and_bcc(self):
        params = MailParams(to=["a@x.com"], subject="S", body="<p>B</p>", bcc=["z@x.com"], html=True)
        message = params.to_payload()["message"]
        self.assertEqual(params.content_type, "HTML")
        self.assertEqual(message["bccRecipients"], [{"emailAddress": {"address": "z@x.com"}}])


class TestTimeRange(unittest.TestCase):
    def test_to_graph(self):
        rng = TimeRange("2024-01-01T09:00:00", "2024-01-01T17:00:00", "UTC").to_graph()
        self.assertEqual(rng["start"], {"dateTime": "2024-01-01T09:00:00", "timeZone": "UTC"})
        self.assertEqual(rng["end"]["dateTime"], "2024-01-01T17:00:00")


if __name__ == "__main__":
    unittest.main()
