"""Update events, summary document and commit message generation."""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from .config import RESOURCE_TYPE
from .utilities.file_io import write_json_file
from .utilities.metadata import format_timestamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateEvent:
    """A list found to have changed during one check cycle."""

    filename: str
    url: str
    hash: str
    version: str | None
    last_modified: str
    server_last_modified: str | None
    etag: str | None
    size: int
    change_reason: str
    expires: str | None
    age_hours: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "url": self.url,
            "hash": self.hash,
            "version": self.version,
            "lastModified": self.last_modified,
            "serverLastModified": self.server_last_modified,
            "etag": self.etag,
            "size": self.size,
            "changeReason": self.change_reason,
            "expires": self.expires,
            "ageHours": self.age_hours,
        }


def build_summary(updated_lists: list[UpdateEvent], now: datetime) -> dict[str, Any]:
    """Build the machine-readable summary of a cycle with updates."""
    return {
        "updated": len(updated_lists),
        "timestamp": format_timestamp(now),
        "lists": [event.to_dict() for event in updated_lists],
    }


def write_summary(summary: dict[str, Any], path: Path) -> None:
    """Write the summary document, replacing the previous one."""
    write_json_file(path, summary)
    logger.info("  → %s", path)


def generate_commit_message(
    updated_lists: list[UpdateEvent], resource_type: str = RESOURCE_TYPE
) -> str:
    """
    Generate a commit message for the updated lists.

    A single list gives "Update easylist.txt to v202610190831"; several
    give a header line followed by one bullet per list.
    """
    if not updated_lists:
        return ""

    if len(updated_lists) == 1:
        event = updated_lists[0]
        suffix = f" to v{event.version}" if event.version else ""
        return f"Update {event.filename}{suffix}"

    bullets = [
        f"- {event.filename}" + (f" (v{event.version})" if event.version else "")
        for event in updated_lists
    ]
    header = f"Update {len(updated_lists)} {resource_type} files"
    return "\n".join([header, ""] + bullets)


class ConsoleSink:
    """Reports cycle outcome through the log only."""

    def publish(self, has_updates: bool, commit_message: str, updated_count: int) -> None:
        if not has_updates:
            return
        logger.info("")
        logger.info("Suggested commit message:")
        for line in commit_message.splitlines():
            logger.info("%s", line)


class GitHubOutputSink(ConsoleSink):
    """Also exposes the outcome as GitHub Actions step outputs."""

    def __init__(self, output_path: Path | str):
        self.output_path = Path(output_path)

    def publish(self, has_updates: bool, commit_message: str, updated_count: int) -> None:
        super().publish(has_updates, commit_message, updated_count)

        outputs = {
            "has_updates": "true" if has_updates else "false",
            "commit_message": commit_message,
            "updated_count": str(updated_count),
        }

        with open(self.output_path, "a", encoding="utf-8") as f:
            for name, value in outputs.items():
                f.write(_format_output(name, value))

        logger.debug("Wrote step outputs to %s", self.output_path)


def _format_output(name: str, value: str) -> str:
    """Format one step output, using a heredoc for multi-line values."""
    if "\n" not in value:
        return f"{name}={value}\n"

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
