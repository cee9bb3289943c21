"""Time utilities for HubSpot timestamps."""

from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def from_unix_ms(milliseconds: int) -> datetime:
    """
    Convert Unix time in milliseconds to an aware UTC datetime.

    Uses timedelta arithmetic so the millisecond part survives exactly.

    Example:
        >>> from_unix_ms(1410381339020)
        datetime.datetime(2014, 9, 10, 20, 35, 39, 20000, tzinfo=datetime.timezone.utc)
    """
    return EPOCH + timedelta(milliseconds=milliseconds)


def to_unix_ms(dt: datetime) -> int:
    """
    Convert a datetime to Unix time in milliseconds.

    Naive datetimes are taken as UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt.astimezone(timezone.utc) - EPOCH
    return (delta.days * 86400 + delta.seconds) * 1000 + delta.microseconds // 1000


def parse_iso_utc(value: str) -> datetime:
    """
    Parse an ISO 8601 string into an aware UTC datetime.

    Args:
        value: Timestamp such as ``2020-03-23T11:03:59.695Z``

    Raises:
        ValueError: If the string is not ISO 8601
    """
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_utc_z(dt: datetime) -> str:
    """
    Convert datetime to ISO 8601 UTC string with Z suffix.

    Raises:
        ValueError: If datetime is naive (not timezone-aware)
    """
    if dt.tzinfo is None:
        raise ValueError(
            f"Naive datetime not allowed. Got {dt}. "
            "Use datetime.now(timezone.utc) or dt.replace(tzinfo=timezone.utc)"
        )
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
