"""ISO 8601 datetime conversion utilities.

All timestamps stored by driver-auth are UTC ISO 8601 strings produced here.
"""

from datetime import datetime, UTC


def to_timestamp(dt: datetime) -> str:
    """Convert datetime to ISO 8601 UTC timestamp string."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.isoformat().replace("+00:00", "Z")


def to_datetime(timestamp: str) -> datetime:
    """Convert ISO 8601 UTC timestamp string to datetime."""
    return datetime.fromisoformat(timestamp.replace('Z', '+00:00'))


def utcnow() -> datetime:
    """Get current time as an aware UTC datetime."""
    return datetime.now(UTC)


def now() -> str:
    """Get current UTC timestamp as ISO 8601 string."""
    return to_timestamp(utcnow())


def to_unix(dt: datetime) -> int:
    """Convert datetime to whole Unix seconds (naive datetimes are UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp())
