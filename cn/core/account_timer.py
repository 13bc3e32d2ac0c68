import uuid
from datetime import datetime
from cn.common.logger import log
from cn.core import schedule
from cn.core.clock import as_utc

# Tracks the weekly drop state for a single account. The only stored time is last_reset, everything else
# (next boundary, remaining/ready) is derived from it on demand.
class AccountTimer:

    def __init__(self, account_id, name, last_reset, rule=schedule.DEFAULT_RULE):
        self.id = account_id
        self.name = name
        self.last_reset = as_utc(last_reset)
        self.rule = rule

    # Builds a brand new account with a fresh id. Blank names are rejected, that's the only validation.
    @classmethod
    def create(cls, name, initial_last_drop, rule=schedule.DEFAULT_RULE):
        name = _clean_name(name)
        timer = cls(uuid.uuid4().hex, name, initial_last_drop, rule)
        log.debug(f"Created account '{name}' ({timer.id}) with last drop {timer.last_reset.isoformat()}")
        return timer

    # The boundary this account is currently waiting for.
    @property
    def next_reset(self):
        return schedule.next_reset(self.last_reset, self.rule)

    def current_status(self, now):
        return schedule.status(self.last_reset, now, self.rule)

    # Marks a drop as received at `now`, starting a fresh wait for the following boundary.
    def reset(self, now):
        self.last_reset = as_utc(now)
        log.debug(f"Reset account '{self.name}' ({self.id}) at {self.last_reset.isoformat()}")
        return self

    def rename(self, new_name):
        old_name = self.name
        self.name = _clean_name(new_name)
        log.debug(f"Renamed account {self.id} from '{old_name}' to '{self.name}'")
        return self

    # Used when the user edits the "last drop" field directly rather than pressing reset.
    def set_last_drop(self, when):
        self.last_reset = as_utc(when)
        log.debug(f"Set last drop of '{self.name}' ({self.id}) to {self.last_reset.isoformat()}")
        return self

    def to_dict(self):
        return {"id": self.id, "name": self.name, "last_reset": self.last_reset.isoformat()}

    @classmethod
    def from_dict(cls, data, rule=schedule.DEFAULT_RULE):
        return cls(
            str(data["id"]),
            _clean_name(data["name"]),
            datetime.fromisoformat(data["last_reset"]),
            rule,
        )

    def __repr__(self):
        return f"AccountTimer(id={self.id!r}, name={self.name!r}, last_reset={self.last_reset.isoformat()!r})"


def _clean_name(name):
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Account name must be a non-empty string")
    return name.strip()
