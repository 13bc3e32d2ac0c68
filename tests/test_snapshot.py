"""Tests for state snapshots and their tiered retention in cn.core.snapshot."""

import json
import shutil
import tempfile
import unittest
from datetime import datetime, timedelta
from pathlib import Path


class TestSnapshot(unittest.TestCase):

    def setUp(self):
        self.tmpdir = Path(tempfile.mkdtemp())
        from cn.core import snapshot
        self._orig_snapshot_dir = snapshot.SNAPSHOT_DIR
        snapshot.SNAPSHOT_DIR = self.tmpdir

    def tearDown(self):
        from cn.core import snapshot
        snapshot.SNAPSHOT_DIR = self._orig_snapshot_dir
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def _sample_state(self):
        return {
            "meta": {"schema_version": 1, "saved_at": "2024-01-04T12:00:00+00:00"},
            "accounts": [{"id": "a", "name": "main", "last_reset": "2024-01-04T12:00:00+00:00"}],
            "settings": {"theme": "Dark"},
        }

    def _fake_snapshot(self, taken_at):
        path = self.tmpdir / f"state_{taken_at.strftime('%Y%m%d_%H%M%S_%f')}.json"
        path.write_text(json.dumps({"meta": {}}), encoding="utf-8")
        return path

    def _remaining(self):
        return sorted(p.name for p in self.tmpdir.iterdir() if p.name.startswith("state_"))

    def test_create_snapshot_writes_file(self):
        from cn.core.snapshot import create_snapshot
        path = create_snapshot(self._sample_state(), "before_delete")
        self.assertTrue(path.exists())
        self.assertEqual(path.parent, self.tmpdir)
        self.assertTrue(path.name.startswith("state_"))
        self.assertTrue(path.name.endswith(".json"))

    def test_snapshot_contains_reason_and_accounts(self):
        from cn.core.snapshot import create_snapshot
        path = create_snapshot(self._sample_state(), "before_reset")
        data = json.loads(path.read_text(encoding="utf-8"))
        self.assertEqual(data["meta"]["snapshot_reason"], "before_reset")
        self.assertEqual(data["accounts"][0]["name"], "main")

    def test_snapshot_does_not_mutate_source(self):
        from cn.core.snapshot import create_snapshot
        state = self._sample_state()
        create_snapshot(state, "test")
        self.assertNotIn("snapshot_reason", state["meta"])

    def test_explicit_dir_is_created(self):
        from cn.core.snapshot import create_snapshot
        target = self.tmpdir / "nested" / "snaps"
        path = create_snapshot(self._sample_state(), "test", snapshot_dir=target)
        self.assertEqual(path.parent, target)

    def test_parse_snapshot_time(self):
        from cn.core.snapshot import _parse_snapshot_time
        dt = _parse_snapshot_time("state_20240103_143011_123456.json")
        self.assertEqual(dt, datetime(2024, 1, 3, 14, 30, 11, 123456))

    def test_parse_snapshot_time_bad_name(self):
        from cn.core.snapshot import _parse_snapshot_time
        self.assertIsNone(_parse_snapshot_time("garbage.json"))
        self.assertIsNone(_parse_snapshot_time("state_notadate.json"))
        self.assertIsNone(_parse_snapshot_time("state_20240103_143011_123456.txt"))

    def test_prune_single_snapshot_safe(self):
        from cn.core.snapshot import create_snapshot, prune_snapshots
        create_snapshot(self._sample_state(), "test")
        self.assertEqual(prune_snapshots(), 0)
        self.assertEqual(len(self._remaining()), 1)

    def test_prune_empty_and_missing_dir_safe(self):
        from cn.core.snapshot import prune_snapshots
        self.assertEqual(prune_snapshots(), 0)
        self.assertEqual(prune_snapshots(self.tmpdir / "nope"), 0)

    def test_prune_keeps_newest_and_one_per_tier(self):
        from cn.core.snapshot import prune_snapshots, TIERS
        now = datetime(2024, 1, 20, 12)
        newest = self._fake_snapshot(now - timedelta(minutes=1))
        for hours in range(2, 24 * 20, 2):
            self._fake_snapshot(now - timedelta(hours=hours))

        prune_snapshots(now=now)

        remaining = self._remaining()
        self.assertIn(newest.name, remaining)
        self.assertLessEqual(len(remaining), len(TIERS) + 1)
        self.assertGreaterEqual(len(remaining), 2)

    def test_prune_keeps_closest_to_week_tier(self):
        from cn.core.snapshot import prune_snapshots
        now = datetime(2024, 1, 20, 12)
        week_old = self._fake_snapshot(now - timedelta(days=7, minutes=10))
        self._fake_snapshot(now - timedelta(days=5))
        self._fake_snapshot(now - timedelta(days=9))
        self._fake_snapshot(now - timedelta(minutes=5))

        prune_snapshots(now=now)
        self.assertIn(week_old.name, self._remaining())

    def test_prune_ignores_non_snapshot_files(self):
        from cn.core.snapshot import prune_snapshots
        other = self.tmpdir / "notes.txt"
        other.write_text("hello", encoding="utf-8")
        now = datetime(2024, 1, 20, 12)
        for hours in range(0, 200, 3):
            self._fake_snapshot(now - timedelta(hours=hours))

        prune_snapshots(now=now)
        self.assertTrue(other.exists())


if __name__ == "__main__":
    unittest.main()
