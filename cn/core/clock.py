from datetime import datetime, timezone


# Default clock for AccountList. Anything else that returns an aware datetime can stand in for it.
def utc_now():
    return datetime.now(timezone.utc)


# Coerces an instant to aware UTC. Naive datetimes are taken to already be UTC.
def as_utc(moment):
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)
