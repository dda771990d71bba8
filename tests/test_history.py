"""Tests for the lazily filled history buffer and the record model."""

from __future__ import annotations

import unittest

from history_fakes import FakeProvider, make_record
from lazylog.errors import HistoryError
from lazylog.history import FileChange, HistoryBuffer


class HistoryBufferTests(unittest.TestCase):
    def test_fill_pulls_only_up_to_target(self) -> None:
        provider = FakeProvider([make_record(i) for i in range(10)])
        buffer = HistoryBuffer(provider)

        self.assertTrue(buffer.ensure_filled(3))

        self.assertEqual([r.summary for r in buffer], ["change 0", "change 1", "change 2"])
        self.assertEqual(provider.calls, 3)
        self.assertFalse(buffer.exhausted)

    def test_fill_to_smaller_target_is_a_noop(self) -> None:
        provider = FakeProvider([make_record(i) for i in range(10)])
        buffer = HistoryBuffer(provider)
        buffer.ensure_filled(4)

        self.assertFalse(buffer.ensure_filled(2))
        self.assertEqual(len(buffer), 4)
        self.assertEqual(provider.calls, 4)

    def test_exhaustion_stops_growth_without_error(self) -> None:
        records = [make_record(i) for i in range(5)]
        provider = FakeProvider(records)
        buffer = HistoryBuffer(provider)

        buffer.ensure_filled(3)
        self.assertEqual(list(buffer), records[:3])
        buffer.ensure_filled(5)
        self.assertEqual(list(buffer), records)
        self.assertFalse(buffer.exhausted)

        self.assertFalse(buffer.ensure_filled(7))
        self.assertEqual(len(buffer), 5)
        self.assertTrue(buffer.exhausted)

        calls = provider.calls
        buffer.ensure_filled(100)
        self.assertEqual(provider.calls, calls)

    def test_scroll_fill_reaches_min_of_target_and_total(self) -> None:
        for total in (0, 1, 7, 30):
            with self.subTest(total=total):
                buffer = HistoryBuffer(FakeProvider([make_record(i) for i in range(total)]))
                buffer.ensure_filled(12)
                self.assertEqual(len(buffer), min(12, total))

    def test_failure_keeps_good_prefix_and_raises(self) -> None:
        provider = FakeProvider([make_record(i) for i in range(5)], fail_on={3})
        buffer = HistoryBuffer(provider)

        with self.assertRaises(HistoryError) as caught:
            buffer.ensure_filled(5)

        self.assertIn("call 3", str(caught.exception))
        self.assertEqual([r.summary for r in buffer], ["change 0", "change 1"])
        self.assertFalse(buffer.exhausted)

    def test_failed_target_is_not_retried_until_a_larger_one(self) -> None:
        provider = FakeProvider([make_record(i) for i in range(5)], fail_on={3})
        buffer = HistoryBuffer(provider)
        with self.assertRaises(HistoryError):
            buffer.ensure_filled(4)

        self.assertFalse(buffer.ensure_filled(4))
        self.assertFalse(buffer.ensure_filled(3))
        self.assertEqual(provider.calls, 3)

        self.assertTrue(buffer.ensure_filled(5))
        self.assertEqual([r.summary for r in buffer], [f"change {i}" for i in range(5)])


class RecordModelTests(unittest.TestCase):
    def test_short_id_and_author(self) -> None:
        record = make_record(255)
        self.assertEqual(record.short_id, record.id[:7])
        self.assertEqual(record.author, "Tests <tests@example.com>")

    def test_rename_label_shows_both_paths(self) -> None:
        self.assertEqual(FileChange("new.py", "R", old_path="old.py").label, "old.py -> new.py")
        self.assertEqual(FileChange("same.py", "M").label, "same.py")


if __name__ == "__main__":
    unittest.main()
