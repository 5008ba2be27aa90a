#!/usr/bin/env python3
"""Command-line interface for filter list monitoring."""

import argparse
import logging
import os
import sys
from pathlib import Path

from .config import (
    HASHES_FILE,
    LIST_URLS,
    LISTS_DIR,
    METADATA_FILE,
    RESOURCE_TYPE,
    SUMMARY_FILE,
    setup_logging,
)
from .monitor import check_for_updates
from .report import ConsoleSink, GitHubOutputSink, generate_commit_message
from .utilities.state import JsonStateStore, StateSaveError

logger = logging.getLogger(__name__)


def select_sink(github_output: str | None = None) -> ConsoleSink:
    """
    Choose where the cycle outcome is reported.

    An explicit output path wins; otherwise GitHub Actions is detected
    from GITHUB_ACTIONS and GITHUB_OUTPUT.
    """
    if github_output:
        return GitHubOutputSink(github_output)

    env_output = os.environ.get("GITHUB_OUTPUT")
    if os.environ.get("GITHUB_ACTIONS") and env_output:
        return GitHubOutputSink(env_output)

    return ConsoleSink()


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Check filter lists for updates and save changed lists",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--lists",
        nargs="+",
        metavar="NAME",
        help=(
            "Only check the given lists (e.g., easylist.txt). "
            "Omit to check all tracked lists."
        ),
    )

    parser.add_argument(
        "--require-hash-change",
        action="store_true",
        help=(
            "Only treat a list as updated when its content changed, "
            "ignoring newer timestamps or ETags on identical content"
        ),
    )

    parser.add_argument(
        "--github-output",
        metavar="PATH",
        help="Write GitHub Actions step outputs to PATH (default: $GITHUB_OUTPUT)",
    )

    args = parser.parse_args()

    # Configure logging
    setup_logging()

    if args.lists:
        invalid_lists = [name for name in args.lists if name not in LIST_URLS]
        if invalid_lists:
            logger.error("Unknown list(s): %s", ", ".join(invalid_lists))
            logger.info("Valid lists: %s", ", ".join(LIST_URLS.keys()))
            return 1
        list_urls = {name: LIST_URLS[name] for name in args.lists}
    else:
        list_urls = dict(LIST_URLS)

    sink = select_sink(args.github_output)

    try:
        result = check_for_updates(
            list_urls,
            hash_store=JsonStateStore(HASHES_FILE),
            metadata_store=JsonStateStore(METADATA_FILE),
            lists_dir=Path(LISTS_DIR),
            summary_path=Path(SUMMARY_FILE),
            require_hash_change=args.require_hash_change,
        )
        commit_message = generate_commit_message(result.updated_lists, RESOURCE_TYPE)
        sink.publish(result.has_updates, commit_message, len(result.updated_lists))
    except (StateSaveError, OSError) as e:
        logger.error("✗ Check failed: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
