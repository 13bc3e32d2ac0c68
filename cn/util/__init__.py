from .misc import (
    DATE_FORMAT,
    format_date,
    format_duration,
    format_status,
    now_iso,
    parse_date,
    read_legacy_accounts,
)

__all__ = [
    "DATE_FORMAT",
    "format_date",
    "format_duration",
    "format_status",
    "now_iso",
    "parse_date",
    "read_legacy_accounts",
]
