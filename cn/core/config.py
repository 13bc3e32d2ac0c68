import copy
import json
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from cn.common.logger import log
from cn.common.setup import PATHS
from cn.core.account_timer import AccountTimer
from cn.core.accounts import AccountList
from cn.core.clock import utc_now
from cn.core.schedule import ResetRule
from cn.util import DATE_FORMAT, now_iso, read_legacy_accounts


_SCHEMA_VERSION = 1

#region === Helpers and Paths ===

STATE_PATH = PATHS.current / "state.json"

# accounts.dat from the 1.x notifier, only read for first-run migration
_LEGACY_ACCOUNTS = PATHS.legacy

# Default values just for the settings section of the state dict.
_SETTINGS_DEFAULTS = {
    "theme": "Dark",
    "always_on_top": False,
    "confirm_delete": True,
    "confirm_reset": True,
    "reset_weekday": 2,
    "reset_hour": 0,
    "reset_minute": 0,
    "reset_timezone": "UTC",
    "date_format": DATE_FORMAT,
    "snapshot_min_minutes": 5,
}
# Range checks for the integer settings, anything outside gets defaulted on load.
_SETTINGS_RANGES = {
    "reset_weekday": (0, 6),
    "reset_hour": (0, 23),
    "reset_minute": (0, 59),
    "snapshot_min_minutes": (1, 60),
}

# Helper to return a truly fresh, default state.
def build_default_state():
    return {
        "meta": {
            "schema_version": _SCHEMA_VERSION,
            "saved_at": now_iso(),
        },
        "accounts": [],
        "settings": dict(_SETTINGS_DEFAULTS),
    }

# Whether a single settings value is usable as-is.
def _valid_setting(key, value):
    default = _SETTINGS_DEFAULTS[key]
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        low, high = _SETTINGS_RANGES.get(key, (value, value))
        return low <= value <= high
    if key == "reset_timezone":
        return _valid_timezone(value)
    return isinstance(value, str) and bool(value)

def _valid_timezone(name):
    if name in ("UTC", "local"):
        return True
    if not isinstance(name, str):
        return False
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True

# Builds the reset rule the settings describe.
def rule_from_settings(settings):
    return ResetRule(
        weekday=settings.get("reset_weekday", _SETTINGS_DEFAULTS["reset_weekday"]),
        hour=settings.get("reset_hour", _SETTINGS_DEFAULTS["reset_hour"]),
        minute=settings.get("reset_minute", _SETTINGS_DEFAULTS["reset_minute"]),
        timezone=settings.get("reset_timezone", _SETTINGS_DEFAULTS["reset_timezone"]),
    )

#endregion === Helpers and Paths ===

#region === Accounts <-> State ===

# Rehydrates the account list from a loaded state dict. Entries that don't parse are skipped with a warning,
# so one bad record can't take the whole list down.
def accounts_from_state(state, clock=utc_now):
    rule = rule_from_settings(state["settings"])
    timers = []
    seen = set()
    for entry in state["accounts"]:
        try:
            timer = AccountTimer.from_dict(entry, rule)
        except (KeyError, TypeError, ValueError):
            log.warning(f"Skipping unreadable account entry in state: {entry!r}", exc_info=True)
            continue
        if timer.id in seen:
            log.warning(f"Skipping duplicate account id '{timer.id}' in state")
            continue
        seen.add(timer.id)
        timers.append(timer)
    return AccountList(clock=clock, rule=rule, timers=timers)

def accounts_to_state(accounts):
    return [timer.to_dict() for timer in accounts]

# Builds state account entries out of the legacy 1.x accounts.dat.
def _migrate_legacy_accounts(legacy_path):
    entries = []
    for name, last_drop in read_legacy_accounts(legacy_path):
        try:
            entries.append(AccountTimer.create(name, last_drop).to_dict())
        except ValueError:
            log.warning(f"Skipping legacy account with a blank name (last drop {last_drop.isoformat()})")
    return entries

#endregion === Accounts <-> State ===

#region === Saving and Loading State ===

# Loads the current state from PATHS.current / state.json, ensuring the schema is valid and handling
# default fallbacks.
def load_state():
    try:
        # No save yet: either migrate an old accounts.dat sitting next to the install, or start fresh.
        if not STATE_PATH.exists():
            state = build_default_state()
            if _LEGACY_ACCOUNTS.exists():
                state["accounts"] = _migrate_legacy_accounts(_LEGACY_ACCOUNTS)
                log.info(f"No existing state.json found, migrated {len(state['accounts'])} account(s) from legacy '{_LEGACY_ACCOUNTS}'.")
            else:
                log.info("No existing state.json found in `current`, loading fresh state dict.")
            save_state(state)
        else:
            with open(STATE_PATH, "r", encoding="utf-8") as f:
                state = json.load(f)
            if not isinstance(state, dict):
                raise TypeError(f"state.json must hold an object, got {type(state).__name__}")
            defaulted_values = set()

            # Validate the meta dict
            if "meta" not in state or not isinstance(state["meta"], dict):
                defaulted_values.add("meta")
                state["meta"] = {}
            if "schema_version" not in state["meta"] or not isinstance(state["meta"]["schema_version"], int):
                defaulted_values.add("meta.schema_version")
                state["meta"]["schema_version"] = _SCHEMA_VERSION

            # Validate the accounts list, individual entries are checked when they get rehydrated
            if "accounts" not in state or not isinstance(state["accounts"], list):
                defaulted_values.add("accounts")
                state["accounts"] = []

            # Validate the settings dict, fill in or replace any bad values with defaults
            if "settings" not in state or not isinstance(state["settings"], dict):
                defaulted_values.add("settings")
                state["settings"] = dict(_SETTINGS_DEFAULTS)
            else:
                for key, default in _SETTINGS_DEFAULTS.items():
                    if key not in state["settings"] or not _valid_setting(key, state["settings"][key]):
                        defaulted_values.add(f"settings.{key}")
                        state["settings"][key] = default

            # Log results
            if defaulted_values:
                log.warning(f"Successfully loaded state from '{STATE_PATH}', but with missing values that were defaulted: {', '.join(sorted(defaulted_values))}")
            else:
                log.info(f"Successfully loaded state from '{STATE_PATH}'.")
        return state
    # Fall back to a fresh state dict in case of error, but warn in log
    except (json.JSONDecodeError, OSError, TypeError, UnicodeDecodeError):
        log.warning("Ran into an error while trying to load state.json, falling back to loading a fresh state dict.", exc_info=True)
        return build_default_state()

# Write the given state to disk under PATHS.current / state.json
def save_state(state):
    state["meta"]["saved_at"] = now_iso()
    STATE_PATH.parent.mkdir(parents=True, exist_ok=True)
    with open(STATE_PATH, "w", encoding="utf-8") as f:
        json.dump(state, f, indent=2)
    log.info(f"Successfully saved state to '{STATE_PATH}'")

# Assembles a full state dict from live objects, ready for save_state.
def build_state(accounts, settings):
    state = build_default_state()
    state["accounts"] = accounts_to_state(accounts)
    state["settings"] = copy.deepcopy(settings)
    return state

#endregion === Saving and Loading State ===
