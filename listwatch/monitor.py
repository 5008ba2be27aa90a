"""Check cycle: fetch each tracked list, detect changes and persist them."""

import logging
import time
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

import httpx

from .config import CHECK_INTERVAL_MINUTES, REQUEST_DELAY
from .report import UpdateEvent, build_summary, write_summary
from .utilities.content_changed import (
    calculate_hash,
    detect_change,
    effective_last_modified,
    extract_list_header,
)
from .utilities.download import FetchError, create_client, fetch_list
from .utilities.file_io import write_bytes_file
from .utilities.metadata import (
    ListMetadata,
    dump_entries,
    format_timestamp,
    load_entries,
    utc_now,
)
from .utilities.throttle import is_recently_checked, minutes_since_check

logger = logging.getLogger(__name__)


class StateStore(Protocol):
    def load(self) -> dict[str, Any]: ...

    def save(self, mapping: dict[str, Any]) -> None: ...


@dataclass
class CheckResult:
    """
    Outcome of one check cycle.

    statuses maps every tracked filename to one of:
    - "updated": New content was saved
    - "up_to_date": Fetched, no change detected
    - "skipped": Checked too recently, not fetched
    - "error": Download or processing failed
    """

    has_updates: bool
    updated_lists: list[UpdateEvent] = field(default_factory=list)
    summary: dict[str, Any] | None = None
    statuses: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class _ListOutcome:
    event: UpdateEvent | None
    content: bytes
    new_hash: str
    entry: ListMetadata | None


# =============================================================================
# Public API
# =============================================================================


def check_for_updates(
    list_urls: dict[str, str],
    hash_store: StateStore,
    metadata_store: StateStore,
    lists_dir: Path | str,
    summary_path: Path | str,
    client: httpx.Client | None = None,
    now: datetime | None = None,
    delay: float = REQUEST_DELAY,
    check_interval: float = CHECK_INTERVAL_MINUTES,
    require_hash_change: bool = False,
) -> CheckResult:
    """
    Run one check cycle over all tracked lists.

    Loads both state documents, processes the lists one after another,
    writes each changed list to lists_dir and finally saves the state.
    The hash record is saved only if something changed; the metadata
    record is always saved so that check times are kept.

    Args:
        list_urls: Mapping of output filename to source URL
        hash_store: Store for the filename -> content hash record
        metadata_store: Store for the filename -> metadata record
        lists_dir: Directory receiving the downloaded lists
        summary_path: Where to write the summary when lists changed
        client: HTTP client to use; one is created if omitted
        now: Time of the cycle (defaults to the current UTC time)
        delay: Seconds to wait between two downloads
        check_interval: Lists checked more recently than this many
            minutes ago are skipped
        require_hash_change: Only treat a list as updated when its
            content hash changed

    Returns:
        CheckResult for the cycle

    Raises:
        StateSaveError: If state or list content cannot be written
    """
    if now is None:
        now = utc_now()

    if client is None:
        with create_client() as own_client:
            return check_for_updates(
                list_urls,
                hash_store,
                metadata_store,
                lists_dir,
                summary_path,
                client=own_client,
                now=now,
                delay=delay,
                check_interval=check_interval,
                require_hash_change=require_hash_change,
            )

    return _run_cycle(
        client=client,
        list_urls=list_urls,
        hash_store=hash_store,
        metadata_store=metadata_store,
        lists_dir=Path(lists_dir),
        summary_path=Path(summary_path),
        now=now,
        delay=delay,
        check_interval=check_interval,
        require_hash_change=require_hash_change,
    )


# =============================================================================
# Internal Implementation
# =============================================================================


def _run_cycle(
    client: httpx.Client,
    list_urls: dict[str, str],
    hash_store: StateStore,
    metadata_store: StateStore,
    lists_dir: Path,
    summary_path: Path,
    now: datetime,
    delay: float,
    check_interval: float,
    require_hash_change: bool,
) -> CheckResult:
    hashes: dict[str, str] = dict(hash_store.load())
    entries = load_entries(metadata_store.load())

    updated_lists: list[UpdateEvent] = []
    statuses: dict[str, str] = {}
    fetched_any = False

    logger.info("Checking %d lists for updates...", len(list_urls))

    for filename, url in list_urls.items():
        entry = entries.get(filename)

        if is_recently_checked(entry, now, check_interval):
            logger.info(
                "- %s was checked %.0f minutes ago (waiting for %g-minute interval)",
                filename,
                minutes_since_check(entry, now),
                check_interval,
            )
            statuses[filename] = "skipped"
            continue

        # Rate limiting: wait between requests (not before the first)
        if fetched_any and delay > 0:
            time.sleep(delay)
        fetched_any = True

        try:
            outcome = _check_list(
                client, filename, url, hashes.get(filename), entry, now, require_hash_change
            )
        except FetchError as e:
            logger.error("✗ Error fetching %s: %s", filename, e)
            statuses[filename] = "error"
            continue
        except Exception as e:
            logger.error("✗ Error processing %s: %s", filename, e)
            statuses[filename] = "error"
            continue

        if outcome.event is not None:
            write_bytes_file(lists_dir / filename, outcome.content)
            logger.info("  → %s", lists_dir / filename)
            hashes[filename] = outcome.new_hash
            updated_lists.append(outcome.event)
            statuses[filename] = "updated"
        else:
            statuses[filename] = "up_to_date"

        if outcome.entry is not None:
            entries[filename] = outcome.entry

    logger.info("")
    if updated_lists:
        hash_store.save(hashes)
        metadata_store.save(dump_entries(entries))
        logger.info("✓ %d list(s) updated", len(updated_lists))

        summary = build_summary(updated_lists, now)
        write_summary(summary, summary_path)
        return CheckResult(
            has_updates=True,
            updated_lists=updated_lists,
            summary=summary,
            statuses=statuses,
        )

    metadata_store.save(dump_entries(entries))
    logger.info("All lists are up to date")
    return CheckResult(has_updates=False, statuses=statuses)


def _check_list(
    client: httpx.Client,
    filename: str,
    url: str,
    stored_hash: str | None,
    entry: ListMetadata | None,
    now: datetime,
    require_hash_change: bool,
) -> _ListOutcome:
    """Fetch one list and work out its new state without touching disk."""
    logger.info("Fetching %s...", filename)
    fetched = fetch_list(client, url)

    new_hash = calculate_hash(fetched.content)
    header = extract_list_header(fetched.text)
    last_modified = effective_last_modified(fetched.headers.last_modified, fetched.text, now)

    change = detect_change(
        stored_hash,
        entry,
        new_hash,
        last_modified,
        fetched.headers.etag,
        require_hash_change=require_hash_change,
    )

    if not change.changed:
        age = _age_hours(entry.last_modified_at if entry else None, now)
        logger.info("- %s is up to date (age: %s hours)", filename, age)
        checked = replace(entry, last_checked=format_timestamp(now)) if entry else None
        return _ListOutcome(event=None, content=fetched.content, new_hash=new_hash, entry=checked)

    age = _age_hours(last_modified, now)
    last_modified_iso = format_timestamp(last_modified)

    logger.info("✓ %s has been updated (%s)", filename, change.reason)
    logger.info("  Version: %s", header.version or "N/A")
    logger.info("  Last Modified: %s", last_modified_iso)
    logger.info("  Server Last-Modified: %s", fetched.headers.last_modified or "N/A")
    logger.info("  ETag: %s", fetched.headers.etag or "N/A")
    logger.info("  File Age: %s hours", age)

    event = UpdateEvent(
        filename=filename,
        url=url,
        hash=new_hash,
        version=header.version,
        last_modified=last_modified_iso,
        server_last_modified=fetched.headers.last_modified,
        etag=fetched.headers.etag,
        size=len(fetched.content),
        change_reason=change.reason,
        expires=header.expires,
        age_hours=age,
    )

    new_entry = ListMetadata(
        last_modified=last_modified_iso,
        etag=fetched.headers.etag,
        version=header.version,
        last_checked=format_timestamp(now),
        size=len(fetched.content),
        extra=dict(entry.extra) if entry else {},
    )

    return _ListOutcome(event=event, content=fetched.content, new_hash=new_hash, entry=new_entry)


def _age_hours(last_modified: datetime | None, now: datetime) -> str:
    """Age in hours with one decimal, or "unknown"."""
    if last_modified is None:
        return "unknown"
    return f"{(now - last_modified).total_seconds() / 3600:.1f}"
