"""Shared pytest fixtures and configuration."""

from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def no_request_delay():
    """Skip the pause between requests in all tests for speed."""
    with patch("listwatch.monitor.time.sleep") as mock_sleep:
        yield mock_sleep
