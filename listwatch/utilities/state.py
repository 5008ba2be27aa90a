"""State stores for the hash and metadata records."""

import copy
import logging
from pathlib import Path
from typing import Any

from .file_io import StateLoadError, StateSaveError, read_json_object, write_json_file

logger = logging.getLogger(__name__)

# Type alias for a whole state document (filename -> value)
StateDict = dict[str, Any]


class JsonStateStore:
    """A state document kept as a single JSON file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> StateDict:
        """Load the stored mapping, starting fresh if it cannot be read."""
        if not self.path.exists():
            logger.info("No existing state file at %s, starting fresh", self.path)
            return {}

        try:
            return read_json_object(self.path)
        except StateLoadError as e:
            logger.error("%s", e)
            logger.info("Starting with empty state for %s", self.path)
            return {}

    def save(self, mapping: StateDict) -> None:
        """Overwrite the stored mapping.

        Raises:
            StateSaveError: If the file cannot be written
        """
        write_json_file(self.path, mapping)

    def __repr__(self) -> str:
        return f"JsonStateStore({str(self.path)!r})"


class MemoryStateStore:
    """In-memory state store with the same interface as JsonStateStore."""

    def __init__(self, initial: StateDict | None = None):
        self.data: StateDict = copy.deepcopy(initial) if initial else {}
        self.save_count = 0

    def load(self) -> StateDict:
        return copy.deepcopy(self.data)

    def save(self, mapping: StateDict) -> None:
        self.data = copy.deepcopy(mapping)
        self.save_count += 1


__all__ = [
    "JsonStateStore",
    "MemoryStateStore",
    "StateDict",
    "StateLoadError",
    "StateSaveError",
]
