"""Tests for the polling throttle."""

from datetime import datetime, timedelta, timezone

from listwatch.utilities.metadata import ListMetadata, format_timestamp
from listwatch.utilities.throttle import is_recently_checked, minutes_since_check

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


def _entry_checked(minutes_ago: float) -> ListMetadata:
    return ListMetadata(last_checked=format_timestamp(NOW - timedelta(minutes=minutes_ago)))


def test_minutes_since_check():
    """Test elapsed minutes since the stored check."""
    assert minutes_since_check(_entry_checked(30), NOW) == 30


def test_minutes_since_check_without_entry():
    """Test that no entry or no lastChecked gives None."""
    assert minutes_since_check(None, NOW) is None
    assert minutes_since_check(ListMetadata(), NOW) is None


def test_recently_checked_within_interval():
    """Test that a list checked 89 minutes ago is throttled."""
    assert is_recently_checked(_entry_checked(89), NOW, 90) is True


def test_not_recently_checked_at_interval():
    """Test that exactly 90 minutes is no longer throttled."""
    assert is_recently_checked(_entry_checked(90), NOW, 90) is False


def test_not_recently_checked_after_interval():
    """Test that an old check is not throttled."""
    assert is_recently_checked(_entry_checked(600), NOW, 90) is False


def test_never_checked_is_not_throttled():
    """Test that lists without a stored check are always fetched."""
    assert is_recently_checked(None, NOW, 90) is False
    assert is_recently_checked(ListMetadata(etag='"abc"'), NOW, 90) is False


def test_malformed_last_checked_is_not_throttled():
    """Test that an unparseable lastChecked does not block fetching."""
    assert is_recently_checked(ListMetadata(last_checked="not a date"), NOW, 90) is False
