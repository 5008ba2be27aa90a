"""Configuration for filter list monitoring."""

import logging
from typing import Final

LIST_URLS: Final[dict[str, str]] = {
    "easylist.txt": "https://easylist.to/easylist/easylist.txt",
    "easyprivacy.txt": "https://easylist.to/easylist/easyprivacy.txt",
}

# Used in multi-list commit messages ("Update 2 EasyList files")
RESOURCE_TYPE: Final[str] = "EasyList"

DATA_DIR: Final[str] = "data"
LISTS_DIR: Final[str] = f"{DATA_DIR}/lists"
HASHES_FILE: Final[str] = f"{DATA_DIR}/hashes.json"
METADATA_FILE: Final[str] = f"{DATA_DIR}/metadata.json"
SUMMARY_FILE: Final[str] = f"{DATA_DIR}/update-summary.json"

# Minimum minutes between two fetches of the same list
CHECK_INTERVAL_MINUTES: Final[int] = 90

# Seconds to pause between requests to the same server
REQUEST_DELAY: Final[float] = 1.0

REQUEST_TIMEOUT: Final[float] = 30.0


def setup_logging() -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
