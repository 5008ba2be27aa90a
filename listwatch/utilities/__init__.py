"""Utilities for filter list monitoring."""

from .content_changed import (
    ChangeResult,
    ListHeader,
    calculate_hash,
    detect_change,
    effective_last_modified,
    extract_list_header,
    parse_timestamp,
)
from .download import FetchError, FetchResult, ResponseHeaders, create_client, fetch_list
from .metadata import ListMetadata, format_timestamp, utc_now, utc_timestamp
from .state import JsonStateStore, MemoryStateStore, StateLoadError, StateSaveError
from .throttle import is_recently_checked, minutes_since_check

__all__ = [
    "ChangeResult",
    "ListHeader",
    "calculate_hash",
    "detect_change",
    "effective_last_modified",
    "extract_list_header",
    "parse_timestamp",
    "FetchError",
    "FetchResult",
    "ResponseHeaders",
    "create_client",
    "fetch_list",
    "ListMetadata",
    "format_timestamp",
    "utc_now",
    "utc_timestamp",
    "JsonStateStore",
    "MemoryStateStore",
    "StateLoadError",
    "StateSaveError",
    "is_recently_checked",
    "minutes_since_check",
]
