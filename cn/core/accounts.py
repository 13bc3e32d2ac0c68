"""Keyed, ordered collection of AccountTimers, the single owner of every timer."""

from cn.common.logger import log
from cn.core import schedule
from cn.core.account_timer import AccountTimer
from cn.core.clock import utc_now


class AccountList:
    """Accounts in insertion order, addressed by id.

    ``clock`` is the only source of "now" for add/reset/status, so tests can hand
    in a fixed instant.
    """

    def __init__(self, clock=utc_now, rule=schedule.DEFAULT_RULE, timers=None):
        self._clock = clock
        self.rule = rule
        self._timers = {}
        for timer in timers or ():
            timer.rule = rule
            self._timers[timer.id] = timer

    def __len__(self):
        return len(self._timers)

    def __iter__(self):
        return iter(list(self._timers.values()))

    def __contains__(self, account_id):
        return account_id in self._timers

    def now(self):
        return self._clock()

    def get(self, account_id):
        return self._timers[account_id]

    def add(self, name, last_drop=None):
        """Adds a new account. With no ``last_drop`` the drop is taken to be right now."""
        when = last_drop if last_drop is not None else self._clock()
        timer = AccountTimer.create(name, when, self.rule)
        self._timers[timer.id] = timer
        return timer

    def remove(self, account_id):
        timer = self._timers.pop(account_id)
        log.debug(f"Removed account '{timer.name}' ({account_id})")
        return timer

    def rename(self, account_id, new_name):
        return self._timers[account_id].rename(new_name)

    def reset(self, account_id):
        return self._timers[account_id].reset(self._clock())

    def set_last_drop(self, account_id, when):
        return self._timers[account_id].set_last_drop(when)

    def set_rule(self, rule):
        self.rule = rule
        for timer in self._timers.values():
            timer.rule = rule
        log.info(f"Reset rule changed to {rule.describe()}")

    def statuses(self, now=None):
        """(timer, status) for every account, all evaluated against the same instant."""
        now = now if now is not None else self._clock()
        return [(timer, timer.current_status(now)) for timer in self._timers.values()]

    def ready_count(self, now=None):
        pairs = self.statuses(now)
        return sum(1 for _, st in pairs if st.is_ready), len(pairs)
