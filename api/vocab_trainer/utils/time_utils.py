"""
Epoch-millisecond helpers.

Scheduling state is stored as epoch milliseconds; day arithmetic happens on
wall-clock dates in a named time zone.
"""
import time
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

MS_PER_MINUTE = 60_000


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return time.time_ns() // 1_000_000


def to_datetime(epoch_ms: int, tz_name: str = "UTC") -> datetime:
    """Convert epoch milliseconds to an aware datetime in the given zone."""
    return datetime.fromtimestamp(epoch_ms / 1000, tz=ZoneInfo(tz_name))


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive values (databases without zone support return them); convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def from_datetime(value: datetime) -> int:
    """Convert a datetime to epoch milliseconds (naive values are taken as UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def add_days(epoch_ms: int, days: int, tz_name: str = "UTC") -> int:
    """
    Add calendar days to a timestamp.

    The day component of the local date is incremented and the wall-clock time
    kept, so Jan 31 + 1 day is Feb 1 and a DST change does not shift the hour.

    Args:
        epoch_ms: Base time in epoch milliseconds
        days: Number of calendar days to add
        tz_name: IANA zone whose calendar is used

    Returns:
        Resulting time in epoch milliseconds
    """
    seconds, millis = divmod(epoch_ms, 1000)
    local = datetime.fromtimestamp(seconds, tz=ZoneInfo(tz_name))
    # Aware datetime + timedelta is wall-clock arithmetic within the same zone
    shifted = local + timedelta(days=days)
    return int(shifted.timestamp()) * 1000 + millis


def minutes_from_ms(duration_ms: int) -> int:
    """Whole minutes in a duration."""
    return max(0, duration_ms) // MS_PER_MINUTE
