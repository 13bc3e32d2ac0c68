from datetime import datetime, timedelta, timezone

DATE_FORMAT = "%H:%M:%S %d/%m/%Y"


# Simply returns the current local time as an ISO8601 string with timezone offset.
def now_iso():
    return datetime.now().astimezone().isoformat()


# Renders a countdown as D:HH:MM:SS. Negative durations clamp to zero.
def format_duration(duration):
    seconds = max(0, int(duration.total_seconds() if isinstance(duration, timedelta) else duration))
    days, rem = divmod(seconds, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{days}:{hours:02d}:{minutes:02d}:{secs:02d}"


def format_status(status):
    if status.is_ready:
        return "Ready!"
    return f"Remaining: {format_duration(status.duration)}"


# Shows an instant in the machine's local time, which is what the user typed it in as.
def format_date(moment, fmt=DATE_FORMAT):
    return moment.astimezone().strftime(fmt)


# Parses local wall-clock text (e.g. "21:30:00 03/01/2024") into an aware UTC datetime. Raises ValueError on junk.
def parse_date(text, fmt=DATE_FORMAT):
    naive = datetime.strptime(text.strip(), fmt)
    return naive.astimezone().astimezone(timezone.utc)


# Reads the legacy 1.x accounts.dat: repeated [name bytes][0x00][u64 little-endian unix seconds].
# Returns (name, utc datetime) pairs. A truncated trailing record is dropped.
def read_legacy_accounts(legacy_path):
    data = legacy_path.read_bytes()
    records = []
    pos = 0
    while pos < len(data):
        end = data.find(b"\x00", pos)
        if end == -1 or end + 9 > len(data):
            break
        name = data[pos:end].decode("utf-8", errors="replace")
        seconds = int.from_bytes(data[end + 1:end + 9], "little")
        records.append((name, datetime.fromtimestamp(seconds, tz=timezone.utc)))
        pos = end + 9
    return records
