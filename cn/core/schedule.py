"""Weekly reset boundary math. Pure functions, no UI and no clock reads.

A case drop becomes available again at the first reset boundary strictly after the
account's ``last_reset``. Boundaries fall once a week on ``ResetRule.weekday`` at
``hour:minute`` wall-clock time in ``ResetRule.timezone``. The default rule is
Wednesday 00:00 UTC.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from cn.core.clock import as_utc

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)
WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

WEEK = timedelta(days=7)


@dataclass(frozen=True)
class ResetRule:
    """When the weekly drop resets. ``timezone`` is an IANA name, "UTC" or "local"."""
    weekday: int = WEDNESDAY
    hour: int = 0
    minute: int = 0
    timezone: str = "UTC"

    def __post_init__(self):
        if not 0 <= self.weekday <= 6:
            raise ValueError(f"weekday must be 0-6, got {self.weekday}")
        if not 0 <= self.hour <= 23:
            raise ValueError(f"hour must be 0-23, got {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"minute must be 0-59, got {self.minute}")
        try:
            self.tz
        except (ZoneInfoNotFoundError, ValueError, TypeError, OSError) as e:
            raise ValueError(f"unknown time zone {self.timezone!r}") from e

    # None for "local": astimezone() then applies the machine zone, DST included, per instant
    @property
    def tz(self):
        if self.timezone == "UTC":
            return timezone.utc
        if self.timezone == "local":
            return None
        return ZoneInfo(self.timezone)

    def describe(self):
        return f"{WEEKDAY_NAMES[self.weekday]} {self.hour:02d}:{self.minute:02d} {self.timezone}"


DEFAULT_RULE = ResetRule()


@dataclass(frozen=True)
class Ready:
    is_ready = True


@dataclass(frozen=True)
class Remaining:
    duration: timedelta
    is_ready = False


READY = Ready()


def _boundary_on(day: date, rule: ResetRule):
    wall = datetime.combine(day, time(rule.hour, rule.minute))
    if rule.tz is None:
        return wall.astimezone()
    return wall.replace(tzinfo=rule.tz)


def next_reset(last_reset: datetime, rule: ResetRule = DEFAULT_RULE) -> datetime:
    """Earliest boundary strictly after ``last_reset``, returned in UTC."""
    last_reset = as_utc(last_reset)
    local = last_reset.astimezone(rule.tz)
    days_ahead = (rule.weekday - local.weekday()) % 7
    candidate = _boundary_on(local.date() + timedelta(days=days_ahead), rule)
    # Same weekday but at/after the reset time: the boundary is next week's
    if candidate <= last_reset:
        candidate = _boundary_on(local.date() + timedelta(days=days_ahead) + WEEK, rule)
    return candidate.astimezone(timezone.utc)


def status(last_reset: datetime, now: datetime, rule: ResetRule = DEFAULT_RULE):
    """``Ready`` once ``now`` reaches the next boundary, otherwise ``Remaining(boundary - now)``."""
    target = next_reset(last_reset, rule)
    now = as_utc(now)
    if now >= target:
        return READY
    return Remaining(target - now)
