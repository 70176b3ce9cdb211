"""
Helpers for reading the clock and formatting provider timestamps.
"""
from __future__ import annotations

from datetime import UTC, datetime
from email.utils import format_datetime


def utc_now() -> datetime:
    """Timezone-aware current time in UTC. Patch this in tests to freeze the clock."""
    return datetime.now(UTC)


def to_rfc1123(dt: datetime) -> str:
    """
    Format dt as an RFC-1123 date, e.g. 'Thu, 13 Oct 2011 18:02:00 +0000'.

    Naive datetimes are treated as UTC. Aware datetimes are converted to UTC
    first so the offset is always +0000. Sub-second precision is dropped.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return format_datetime(dt.astimezone(UTC).replace(microsecond=0))
