"""Time utilities for UTC timestamp formatting."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_z() -> str:
    """
    Get current UTC time as ISO 8601 string with Z suffix.

    Example:
        >>> utc_now_z()
        '2025-12-23T00:27:07.804Z'
    """
    return to_utc_z(utc_now())


def to_utc_z(dt: datetime) -> str:
    """
    Convert datetime to ISO 8601 UTC string with millisecond precision and Z suffix.

    Raises:
        ValueError: If datetime is naive (not timezone-aware)
    """
    if dt.tzinfo is None:
        raise ValueError(
            f"Naive datetime not allowed. Got {dt}. "
            "Use datetime.now(timezone.utc) or dt.replace(tzinfo=timezone.utc)"
        )
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def today_stamp() -> str:
    """Current UTC date as ``YYYY-MM-DD``, used in download filenames."""
    return utc_now().strftime("%Y-%m-%d")
