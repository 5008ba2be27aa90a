"""Polling throttle based on the last recorded check."""

from datetime import datetime

from .metadata import ListMetadata


def minutes_since_check(entry: ListMetadata | None, now: datetime) -> float | None:
    """
    Minutes elapsed since the list was last checked.

    Args:
        entry: Stored metadata for the list, if any
        now: Current time (timezone-aware)

    Returns:
        Elapsed minutes, or None if no usable lastChecked is stored
    """
    if entry is None:
        return None

    last_checked = entry.last_checked_at
    if last_checked is None:
        return None

    return (now - last_checked).total_seconds() / 60


def is_recently_checked(
    entry: ListMetadata | None, now: datetime, interval_minutes: float
) -> bool:
    """Check whether the list was checked less than interval_minutes ago."""
    elapsed = minutes_since_check(entry, now)
    if elapsed is None:
        return False
    return elapsed < interval_minutes
