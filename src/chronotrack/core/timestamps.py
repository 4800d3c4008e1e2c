"""
UTC timestamp utilities.

Every timestamp chronotrack stores is timezone-aware UTC.  Callers may
supply naive datetimes (treated as UTC) or aware ones in any zone
(converted).
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime) -> datetime:
    """Return *dt* as an aware UTC datetime; naive values are assumed UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_iso8601(dt: datetime | None) -> str | None:
    """Convert datetime to ISO 8601 string."""
    if dt is None:
        return None
    return dt.isoformat()

