"""Tests for countdown/date formatting and the accounts.dat reader in cn.util."""

import shutil
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

from cn.core.schedule import READY, Remaining
from cn.util import (
    format_date,
    format_duration,
    format_status,
    now_iso,
    parse_date,
    read_legacy_accounts,
)


class TestFormatting(unittest.TestCase):

    def test_format_duration(self):
        cases = [
            (timedelta(0), "0:00:00:00"),
            (timedelta(seconds=1), "0:00:00:01"),
            (timedelta(hours=23, minutes=59, seconds=59), "0:23:59:59"),
            (timedelta(days=6, hours=11, minutes=30, seconds=5), "6:11:30:05"),
            (timedelta(days=7), "7:00:00:00"),
        ]
        for duration, expected in cases:
            with self.subTest(duration=duration):
                self.assertEqual(format_duration(duration), expected)

    def test_format_duration_drops_fraction_and_clamps(self):
        self.assertEqual(format_duration(timedelta(seconds=59.9)), "0:00:00:59")
        self.assertEqual(format_duration(timedelta(seconds=-30)), "0:00:00:00")
        self.assertEqual(format_duration(90), "0:00:01:30")

    def test_format_status(self):
        self.assertEqual(format_status(READY), "Ready!")
        self.assertEqual(format_status(Remaining(timedelta(days=1, seconds=1))), "Remaining: 1:00:00:01")

    def test_format_then_parse_same_instant(self):
        moment = datetime(2024, 1, 4, 12, 30, 15, tzinfo=timezone.utc)
        self.assertEqual(parse_date(format_date(moment)), moment)

    def test_parse_date_returns_utc(self):
        parsed = parse_date("12:00:00 04/01/2024")
        self.assertEqual(parsed.utcoffset(), timedelta(0))

    def test_parse_date_custom_format(self):
        moment = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)
        text = format_date(moment, "%Y-%m-%d %H:%M")
        self.assertEqual(parse_date(text, "%Y-%m-%d %H:%M"), moment)

    def test_parse_date_rejects_junk(self):
        for bad in ("", "yesterday", "25:00:00 04/01/2024", "12:00:00 2024-01-04"):
            with self.subTest(text=bad), self.assertRaises(ValueError):
                parse_date(bad)

    def test_now_iso_has_offset(self):
        self.assertIsNotNone(datetime.fromisoformat(now_iso()).tzinfo)


class TestLegacyAccounts(unittest.TestCase):

    def setUp(self):
        self.tmpdir = Path(tempfile.mkdtemp())
        self.path = self.tmpdir / "accounts.dat"

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_reads_records(self):
        self.path.write_bytes(
            b"main\x00" + (1704369600).to_bytes(8, "little")
            + b"alt\x00" + (0).to_bytes(8, "little"))
        records = read_legacy_accounts(self.path)
        self.assertEqual(records, [
            ("main", datetime(2024, 1, 4, 12, tzinfo=timezone.utc)),
            ("alt", datetime(1970, 1, 1, tzinfo=timezone.utc)),
        ])

    def test_empty_file(self):
        self.path.write_bytes(b"")
        self.assertEqual(read_legacy_accounts(self.path), [])

    def test_truncated_trailing_record_dropped(self):
        self.path.write_bytes(b"main\x00" + (1704369600).to_bytes(8, "little") + b"half\x00\x01\x02")
        self.assertEqual([name for name, _ in read_legacy_accounts(self.path)], ["main"])

    def test_name_without_terminator_dropped(self):
        self.path.write_bytes(b"dangling")
        self.assertEqual(read_legacy_accounts(self.path), [])

    def test_invalid_utf8_is_replaced(self):
        self.path.write_bytes(b"m\xffn\x00" + (1704369600).to_bytes(8, "little"))
        [(name, _)] = read_legacy_accounts(self.path)
        self.assertEqual(name, "m�n")


if __name__ == "__main__":
    unittest.main()
