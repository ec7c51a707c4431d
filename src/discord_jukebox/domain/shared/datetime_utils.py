"""Date/time helpers.

Always operate on timezone-aware UTC datetimes.
"""

from __future__ import annotations

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Preferred replacement for ``datetime.now(UTC)``.

    Returns a timezone-aware datetime in UTC.
    """
    return datetime.now(UTC)
