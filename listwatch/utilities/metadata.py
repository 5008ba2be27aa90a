"""Typed metadata records and timestamp helpers."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def utc_now() -> datetime:
    """Current time as an aware UTC datetime with second precision."""
    return datetime.now(timezone.utc).replace(microsecond=0)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as a UTC timestamp.

    Returns:
        Timestamp string in format: 2025-11-18T20:23:07Z
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def utc_timestamp() -> str:
    """Generate a UTC timestamp with second precision."""
    return format_timestamp(utc_now())


def parse_iso_timestamp(value: str | None) -> datetime | None:
    """Parse a stored ISO-8601 timestamp, returning None if it is unusable."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed stored timestamp: %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# On-disk keys, in the order they are written
_FIELDS = {
    "last_modified": "lastModified",
    "etag": "etag",
    "version": "version",
    "last_checked": "lastChecked",
    "size": "size",
}


@dataclass
class ListMetadata:
    """One entry of the metadata record.

    Keys not known to this version are kept in ``extra`` so that
    re-saving a document never drops them.
    """

    last_modified: str | None = None
    etag: str | None = None
    version: str | None = None
    last_checked: str | None = None
    size: int | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ListMetadata":
        known = {attr: data.get(key) for attr, key in _FIELDS.items()}
        extra = {k: v for k, v in data.items() if k not in _FIELDS.values()}
        return cls(**known, extra=extra)

    def to_dict(self) -> dict[str, Any]:
        result = {key: getattr(self, attr) for attr, key in _FIELDS.items()}
        result.update(self.extra)
        return result

    @property
    def last_modified_at(self) -> datetime | None:
        return parse_iso_timestamp(self.last_modified)

    @property
    def last_checked_at(self) -> datetime | None:
        return parse_iso_timestamp(self.last_checked)


def load_entries(document: dict[str, Any]) -> dict[str, ListMetadata]:
    """Convert a raw metadata document into typed entries.

    Entries that are not JSON objects are dropped with a warning.
    """
    entries: dict[str, ListMetadata] = {}
    for filename, data in document.items():
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed metadata entry for %s", filename)
            continue
        entries[filename] = ListMetadata.from_dict(data)
    return entries


def dump_entries(entries: dict[str, ListMetadata]) -> dict[str, Any]:
    """Convert typed entries back into a JSON-serialisable document."""
    return {filename: entry.to_dict() for filename, entry in entries.items()}
