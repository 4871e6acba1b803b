"""Datetime utilities for timezone-aware UTC timestamps.

Usage:
    from libs.common.datetime_utils import utc_now

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
"""

import time
from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime.

    Always use this for timestamps in the database.
    """
    return datetime.now(timezone.utc)


def days_ago(days: int) -> datetime:
    """Start of a reporting window ``days`` back from now (UTC)."""
    return utc_now() - timedelta(days=days)


def epoch_millis() -> int:
    """Milliseconds since the epoch, used to build unique upload filenames."""
    return int(time.time() * 1000)
