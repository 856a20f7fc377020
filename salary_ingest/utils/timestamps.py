"""UTC timestamp helpers."""

from datetime import datetime, timezone
from typing import Optional, Union


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC and convert aware ones to UTC.

    Example:
        >>> ensure_utc(datetime(2025, 11, 4, 12, 0)).tzinfo == timezone.utc
        True
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def unix_to_timestamp(unix_seconds: Union[int, float]) -> datetime:
    """Aware UTC datetime from seconds since the epoch.

    Listing APIs report ``created_utc`` as a float.
    """
    return datetime.fromtimestamp(float(unix_seconds), tz=timezone.utc)


def format_timestamp(dt: Optional[datetime]) -> str:
    """ISO-8601 UTC with a 'Z' suffix, or an empty string for None.

    Example:
        >>> format_timestamp(datetime(2025, 11, 4, 12, 0, tzinfo=timezone.utc))
        '2025-11-04T12:00:00Z'
    """
    dt_utc = ensure_utc(dt)
    if dt_utc is None:
        return ""
    return dt_utc.strftime("%Y-%m-%dT%H:%M:%SZ")
