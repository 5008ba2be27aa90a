"""Centralized file I/O utilities with error handling."""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class StateLoadError(Exception):
    """Raised when a state document is missing, unreadable or malformed."""

    pass


class StateSaveError(Exception):
    """Raised when state or list content cannot be written to disk."""

    pass


def read_json_object(filepath: Path) -> dict[str, Any]:
    """Read a JSON file whose top-level value must be an object.

    Args:
        filepath: Path to the JSON file to read

    Returns:
        Parsed JSON object

    Raises:
        StateLoadError: If the file cannot be read, is not valid JSON,
            or does not hold a JSON object
    """
    try:
        content = filepath.read_text(encoding="utf-8")
    except OSError as e:
        raise StateLoadError(f"Error reading file {filepath}: {e}") from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise StateLoadError(f"Error parsing JSON from {filepath}: {e}") from e

    if not isinstance(data, dict):
        raise StateLoadError(
            f"Expected a JSON object in {filepath}, got {type(data).__name__}"
        )

    return data


def write_json_file(filepath: Path, data: dict[str, Any], indent: int = 2) -> None:
    """Write data as indented JSON, replacing any existing file.

    Raises:
        StateSaveError: If the directory or file cannot be written
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)
            f.write("\n")
    except OSError as e:
        raise StateSaveError(f"Error writing file {filepath}: {e}") from e


def write_bytes_file(filepath: Path, content: bytes) -> None:
    """Write raw bytes verbatim, replacing any existing file.

    Raises:
        StateSaveError: If the directory or file cannot be written
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "wb") as f:
            f.write(content)
    except OSError as e:
        raise StateSaveError(f"Error writing file {filepath}: {e}") from e
