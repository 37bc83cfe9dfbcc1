"""Timezone and timestamp utilities.

Single source of truth for datetime <-> epoch-millisecond conversion.
Everything inside the engine is UTC and timezone-aware; naive values coming
from SQLite or external feeds are interpreted as UTC.
"""

from datetime import UTC, datetime

__all__ = [
    "EPOCH",
    "from_epoch_ms",
    "now_utc",
    "parse_timestamp",
    "to_epoch_ms",
    "to_utc",
]

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def now_utc() -> datetime:
    """Get current time in UTC."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC, treating naive values as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_epoch_ms(dt: datetime) -> int:
    """Datetime to epoch milliseconds."""
    return int(to_utc(dt).timestamp() * 1000)


def from_epoch_ms(value: int | float) -> datetime:
    """Epoch milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(value / 1000, tz=UTC)


def parse_timestamp(value) -> datetime | None:
    """Parse a stored timestamp.

    Accepts datetimes, ISO-8601 strings (SQLite CURRENT_TIMESTAMP format
    included) and epoch milliseconds. Returns None for empty, unparseable
    or out-of-range input.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_utc(value)

    try:
        if isinstance(value, int | float):
            return from_epoch_ms(value)

        text = str(value).strip()
        if text.isdigit():
            return from_epoch_ms(int(text))
        return to_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except (ValueError, OverflowError, OSError):
        return None
