"""Change detection for downloaded filter lists."""

import hashlib
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

from .metadata import ListMetadata

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r"^! Version: (.+)$", re.MULTILINE)
LAST_MODIFIED_PATTERN = re.compile(r"^! Last modified: (.+)$", re.MULTILINE)
EXPIRES_PATTERN = re.compile(r"^! Expires: (.+)$", re.MULTILINE)

REASON_FIRST_TIME = "first time"
REASON_HASH = "content hash changed"
REASON_TIMESTAMP = "timestamp newer"
REASON_ETAG = "ETag changed"


@dataclass(frozen=True)
class ListHeader:
    """Values read from the ``!`` comment header of a filter list."""

    version: str | None = None
    last_modified: str | None = None
    expires: str | None = None


@dataclass(frozen=True)
class ChangeResult:
    changed: bool
    reason: str


def calculate_hash(content: bytes) -> str:
    """Return the SHA-256 hex digest of the raw content."""
    return hashlib.sha256(content).hexdigest()


def _match(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    if match:
        return match.group(1).strip()
    return None


def extract_list_header(text: str) -> ListHeader:
    """
    Extract version, last-modified and expiry lines from list content.

    Args:
        text: Decoded list content

    Returns:
        ListHeader with None for every line that is absent
    """
    header = ListHeader(
        version=_match(VERSION_PATTERN, text),
        last_modified=_match(LAST_MODIFIED_PATTERN, text),
        expires=_match(EXPIRES_PATTERN, text),
    )
    if header.version is None:
        logger.debug("No version line found in list content")
    return header


def parse_timestamp(value: str | None) -> datetime | None:
    """
    Parse a timestamp from an HTTP header or a list header line.

    Accepts RFC 1123 dates ("Sun, 19 Oct 2026 08:31:00 GMT"), the
    filter list format ("19 Oct 2026 08:31 UTC") and ISO-8601.
    Values without a timezone are taken as UTC.

    Returns:
        Aware datetime, or None if the value cannot be parsed
    """
    if not value:
        return None

    value = value.strip()
    parsed: datetime | None = None

    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            logger.debug("Unparseable timestamp: %r", value)
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def effective_last_modified(
    header_value: str | None, text: str, now: datetime
) -> datetime:
    """
    Determine when a list was last modified.

    Uses the later of the HTTP Last-Modified header and the
    "! Last modified:" line in the content, whichever is available,
    and falls back to now when neither can be parsed.
    """
    server_time = parse_timestamp(header_value)
    content_time = parse_timestamp(extract_list_header(text).last_modified)

    if server_time and content_time:
        return max(server_time, content_time)

    return server_time or content_time or now


def detect_change(
    stored_hash: str | None,
    stored_metadata: ListMetadata | None,
    new_hash: str,
    last_modified: datetime,
    etag: str | None,
    require_hash_change: bool = False,
) -> ChangeResult:
    """
    Decide whether a list should be treated as updated.

    Three independent signals are evaluated and combined: the content
    hash, the effective last-modified time against the stored one, and
    the ETag against the stored one. Any of them marks the list changed.

    Args:
        stored_hash: Hash recorded for the previous content, if any
        stored_metadata: Metadata recorded on the previous check, if any
        new_hash: Hash of the freshly downloaded content
        last_modified: Effective last-modified time of the download
        etag: ETag of the download, if the server sent one
        require_hash_change: If True, timestamp and ETag signals alone
            do not mark the list changed

    Returns:
        ChangeResult with the reasons joined by " and "
    """
    if stored_hash is None:
        return ChangeResult(changed=True, reason=REASON_FIRST_TIME)

    reasons: list[str] = []

    hash_changed = new_hash != stored_hash
    if hash_changed:
        reasons.append(REASON_HASH)

    if stored_metadata is not None:
        stored_time = stored_metadata.last_modified_at
        if stored_time is not None and last_modified > stored_time:
            reasons.append(REASON_TIMESTAMP)

        if etag and stored_metadata.etag and etag != stored_metadata.etag:
            reasons.append(REASON_ETAG)

    if require_hash_change and not hash_changed:
        if reasons:
            logger.info("Ignoring %s without a content change", " and ".join(reasons))
        return ChangeResult(changed=False, reason="")

    return ChangeResult(changed=bool(reasons), reason=" and ".join(reasons))
