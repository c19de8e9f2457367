"""
UTC helpers for timestamps maintained by the storage layer.

Timestamps are stored as naive UTC datetimes and made timezone-aware
only when they leave the service.
"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current time as a naive UTC datetime"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_utc(dt: datetime) -> datetime:
    """
    Attach (or convert to) the UTC timezone.

    Args:
        dt: Datetime, naive values are assumed to already be UTC

    Returns:
        Timezone-aware UTC datetime
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

