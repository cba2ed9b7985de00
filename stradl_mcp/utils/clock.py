"""Clock and timestamp helpers.

Timestamps are persisted as ISO-8601 UTC strings with millisecond precision,
e.g. ``2026-02-20T09:00:00.000Z``.
"""

from datetime import datetime, timedelta, timezone

HOUR_SECONDS = 3600.0


def utc_now() -> datetime:
    """Default clock: the current time in UTC."""
    return datetime.now(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """Render a datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def parse_timestamp(value: str | None) -> datetime | None:
    """
    Parse a stored timestamp into an aware UTC datetime.

    Naive values are taken as UTC. Returns None for empty or unparseable input.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def hours_between(earlier: datetime, later: datetime) -> float:
    """Elapsed hours from ``earlier`` to ``later`` (negative if reversed)."""
    return (later - earlier).total_seconds() / HOUR_SECONDS


def end_of_utc_day(now: datetime) -> datetime:
    """The last millisecond of the UTC day containing ``now``."""
    now = now.astimezone(timezone.utc)
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return start + timedelta(days=1) - timedelta(milliseconds=1)
