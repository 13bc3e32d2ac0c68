"""Tests for the keyed account collection in cn.core.accounts."""

import unittest
from datetime import datetime, timedelta, timezone

from cn.core.accounts import AccountList
from cn.core.schedule import ResetRule


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class FakeClock:
    """Settable stand-in for utc_now."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class TestAccountList(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock(utc(2024, 1, 4, 12))
        self.accounts = AccountList(clock=self.clock)

    def test_add_defaults_last_drop_to_clock(self):
        timer = self.accounts.add("main")
        self.assertEqual(timer.last_reset, utc(2024, 1, 4, 12))

    def test_add_with_explicit_last_drop(self):
        timer = self.accounts.add("main", utc(2024, 1, 1))
        self.assertEqual(timer.last_reset, utc(2024, 1, 1))

    def test_add_keeps_insertion_order_and_allows_duplicate_names(self):
        a = self.accounts.add("smurf")
        b = self.accounts.add("smurf")
        c = self.accounts.add("main")
        self.assertEqual([t.id for t in self.accounts], [a.id, b.id, c.id])
        self.assertEqual(len(self.accounts), 3)

    def test_add_blank_name_rejected(self):
        with self.assertRaises(ValueError):
            self.accounts.add("  ")
        self.assertEqual(len(self.accounts), 0)

    def test_get_and_contains(self):
        timer = self.accounts.add("main")
        self.assertIs(self.accounts.get(timer.id), timer)
        self.assertIn(timer.id, self.accounts)
        self.assertNotIn("nope", self.accounts)

    def test_remove(self):
        timer = self.accounts.add("main")
        self.assertIs(self.accounts.remove(timer.id), timer)
        self.assertNotIn(timer.id, self.accounts)

    def test_unknown_id_raises_key_error(self):
        for op in (self.accounts.get, self.accounts.remove, self.accounts.reset):
            with self.subTest(op=op.__name__), self.assertRaises(KeyError):
                op("missing")
        with self.assertRaises(KeyError):
            self.accounts.rename("missing", "x")

    def test_rename(self):
        timer = self.accounts.add("main")
        self.accounts.rename(timer.id, "alt")
        self.assertEqual(self.accounts.get(timer.id).name, "alt")

    def test_reset_uses_clock(self):
        timer = self.accounts.add("main", utc(2024, 1, 1))
        self.clock.advance(days=10)
        self.accounts.reset(timer.id)
        self.assertEqual(timer.last_reset, utc(2024, 1, 14, 12))

    def test_set_last_drop(self):
        timer = self.accounts.add("main")
        self.accounts.set_last_drop(timer.id, utc(2023, 12, 25))
        self.assertEqual(timer.next_reset, utc(2023, 12, 27))

    def test_ready_count(self):
        self.accounts.add("old", utc(2023, 12, 1))
        self.accounts.add("fresh")
        self.assertEqual(self.accounts.ready_count(), (1, 2))
        self.clock.now = utc(2024, 1, 10)
        self.assertEqual(self.accounts.ready_count(), (2, 2))

    def test_ready_count_empty(self):
        self.assertEqual(self.accounts.ready_count(), (0, 0))

    def test_statuses_share_one_instant(self):
        self.accounts.add("a")
        self.accounts.add("b")
        pairs = self.accounts.statuses()
        self.assertEqual(pairs[0][1], pairs[1][1])
        self.assertEqual(pairs[0][1].duration, utc(2024, 1, 10) - self.clock.now)

    def test_statuses_explicit_now(self):
        self.accounts.add("a")
        [(_, st)] = self.accounts.statuses(utc(2024, 1, 9, 23, 59, 59))
        self.assertEqual(st.duration, timedelta(seconds=1))

    def test_set_rule_applies_to_existing_and_new_accounts(self):
        existing = self.accounts.add("a")
        self.accounts.set_rule(ResetRule(hour=12))
        added = self.accounts.add("b", utc(2024, 1, 3))
        self.assertEqual(existing.next_reset, utc(2024, 1, 10, 12))
        self.assertEqual(added.next_reset, utc(2024, 1, 3, 12))

    def test_iteration_is_a_snapshot(self):
        timer = self.accounts.add("a")
        self.accounts.add("b")
        for t in self.accounts:
            if t.id == timer.id:
                self.accounts.remove(t.id)
        self.assertEqual(len(self.accounts), 1)


if __name__ == "__main__":
    unittest.main()
