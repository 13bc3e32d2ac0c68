import copy
import json
from datetime import datetime
from cn.common.setup import PATHS
from cn.common.logger import log

SNAPSHOT_DIR = PATHS.snapshots
_STAMP_FORMAT = "%Y%m%d_%H%M%S_%f"

# Age tiers in seconds. Accounts change about once a week, so retention reaches back two weeks.
TIERS = [
    3600,           # ~1 hour ago
    6 * 3600,       # ~6 hours ago
    86400,          # ~1 day ago
    3 * 86400,      # ~3 days ago
    7 * 86400,      # ~1 week ago
    14 * 86400,     # ~2 weeks ago
]

# Writes a full copy of the state dict into the snapshot folder, tagged with why it was taken.
def create_snapshot(state_dict, reason, snapshot_dir=None):
    snapshot_dir = snapshot_dir or SNAPSHOT_DIR
    snapshot_dir.mkdir(parents=True, exist_ok=True)
    snap = copy.deepcopy(state_dict)
    snap["meta"]["snapshot_reason"] = reason

    target_path = snapshot_dir / f"state_{datetime.now().strftime(_STAMP_FORMAT)}.json"
    with open(target_path, "w", encoding="utf-8") as f:
        json.dump(snap, f, indent=2)
    log.debug(f"Saved snapshot for reason '{reason}' to {target_path}")
    return target_path

# state_20240103_000000_123456.json -> datetime(2024, 1, 3, 0, 0, 0, 123456), None for anything else.
def _parse_snapshot_time(filename):
    if not filename.startswith("state_") or not filename.endswith(".json"):
        return None
    try:
        return datetime.strptime(filename[len("state_"):-len(".json")], _STAMP_FORMAT)
    except ValueError:
        return None

# Keeps the newest snapshot plus whichever one sits closest to each age in TIERS, deleting the rest.
def prune_snapshots(snapshot_dir=None, now=None):
    snapshot_dir = snapshot_dir or SNAPSHOT_DIR
    if not snapshot_dir.is_dir():
        return 0

    entries = []
    for path in snapshot_dir.iterdir():
        taken_at = _parse_snapshot_time(path.name)
        if taken_at is not None:
            entries.append((path, taken_at))
    if len(entries) <= 1:
        return 0

    entries.sort(key=lambda e: e[1], reverse=True)
    now = now or datetime.now()

    keep = {entries[0][0]}
    for tier_secs in TIERS:
        target = now.timestamp() - tier_secs
        closest, _ = min(entries, key=lambda e: abs(e[1].timestamp() - target))
        keep.add(closest)

    pruned_count = 0
    for path, _ in entries:
        if path in keep:
            continue
        try:
            path.unlink()
            pruned_count += 1
        except OSError:
            log.warning(f"Could not remove old snapshot '{path}'", exc_info=True)
    if pruned_count > 0:
        log.info(f"Pruned {pruned_count} files from '{snapshot_dir}'")
    return pruned_count
