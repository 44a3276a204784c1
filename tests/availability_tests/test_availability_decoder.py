"""Tests for availability/decoder.py."""

from __future__ import annotations

import unittest

from availability.decoder import decode_availability_view, status_for_code
from availability.models import StatusInterval, StatusKind
from tests.fixtures import at


class TestStatusForCode(unittest.TestCase):
    def test_known_codes(self):
        self.assertEqual(status_for_code("0"), StatusKind.FREE)
        self.assertEqual(status_for_code("1"), StatusKind.TENTATIVE)
        self.assertEqual(status_for_code("2"), StatusKind.BUSY)
        self.assertEqual(status_for_code("3"), StatusKind.OUT_OF_OFFICE)
        self.assertEqual(status_for_code("4"), StatusKind.WORKING_ELSEWHERE)

    def test_unknown_code(self):
        self.assertEqual(status_for_code("9"), StatusKind.UNKNOWN)
        self.assertEqual(status_for_code("x"), StatusKind.UNKNOWN)


class TestDecodeAvailabilityView(unittest.TestCase):
    def test_merges_adjacent_same_status_buckets(self):
        runs = decode_availability_view("0022110", at(0), 30)
        self.assertEqual(
            runs,
            [
                StatusInterval(at(1), at(2), status=StatusKind.BUSY),
                StatusInterval(at(2), at(3), status=StatusKind.TENTATIVE),
            ],
        )

    def test_empty_string(self):
        self.assertEqual(decode_availability_view("", at(9)), [])

    def test_all_free(self):
        self.assertEqual(decode_availability_view("0000", at(9)), [])

    def test_single_trailing_bucket(self):
        runs = decode_availability_view("0002", at(9), 30)
        self.assertEqual(runs, [StatusInterval(at(10, 30), at(11), status=StatusKind.BUSY)])

    def test_free_bucket_splits_same_status(self):
        runs = decode_availability_view("202", at(9), 60)
        self.assertEqual(
            runs,
            [
                StatusInterval(at(9), at(10), status=StatusKind.BUSY),
                StatusInterval(at(11), at(12), status=StatusKind.BUSY),
            ],
        )

    def test_unknown_runs_do_not_merge_with_other_statuses(self):
        runs = decode_availability_view("2x?3", at(9), 15)
        self.assertEqual(
            [(r.status, r.start, r.end) for r in runs],
            [
                (StatusKind.BUSY, at(9), at(9, 15)),
                (StatusKind.UNKNOWN, at(9, 15), at(9, 45)),
                (StatusKind.OUT_OF_OFFICE, at(9, 45), at(10)),
            ],
        )

    def test_custom_bucket_width(self):
        runs = decode_availability_view("44", at(9), 15)
        self.assertEqual(runs, [StatusInterval(at(9), at(9, 30), status=StatusKind.WORKING_ELSEWHERE)])

    def test_non_positive_bucket_rejected(self):
        with self.assertRaises(ValueError):
            decode_availability_view("2", at(9), 0)

    def test_output_is_start_ascending(self):
        runs = decode_availability_view("1203412", at(8), 30)
        starts = [r.start for r in runs]
        self.assertEqual(starts, sorted(starts))


if __name__ == "__main__":
    unittest.main()
