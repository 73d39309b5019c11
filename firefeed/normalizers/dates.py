"""
Date and time normalization utilities.

Upstream acquisition times are HHMM strings in UTC, sometimes without the
leading zeros ("130" for 01:30).
"""

from datetime import datetime, timezone
from typing import Optional

ISO_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def pad_time(value: Optional[str]) -> Optional[str]:
    """Zero-pad an HHMM acquisition time; None if it is not a valid clock time."""
    if value is None:
        return None

    value = value.strip().replace(":", "")
    if not value.isdigit() or len(value) > 4:
        return None

    value = value.zfill(4)
    hour, minute = int(value[:2]), int(value[2:])
    if hour > 23 or minute > 59:
        return None
    return value


def parse_acquisition(date_str: Optional[str], time_str: Optional[str]) -> Optional[datetime]:
    """Combine an acquisition date and HHMM time into an aware UTC datetime."""
    padded = pad_time(time_str)
    if not date_str or padded is None:
        return None

    try:
        dt = datetime.strptime(date_str.strip() + padded, "%Y-%m-%d%H%M")
    except ValueError:
        return None
    return dt.replace(tzinfo=timezone.utc)


def canonical_timestamp(dt: datetime) -> str:
    """Render a datetime as an ISO-8601 UTC timestamp."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime(ISO_FORMAT)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not value:
        return None

    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"

    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)
