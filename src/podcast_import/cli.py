"""
Command-line interface for the podcast importer.

Usage:
    podcast-import run                      # Fetch sources, write documents, update data file
    podcast-import run --dry-run            # Fetch and report without writing anything
    podcast-import run --no-dedupe          # Append every fetched episode
    podcast-import run --output-json        # JSON output for CI integration
    podcast-import slug "Episode: Title"    # Show the folder name for a title

Exit codes:
    0   success
    1   unexpected error
    2   sources or previous episode data could not be loaded
    3   episode data could not be written
    4   run completed but at least one source failed to fetch
    130 cancelled by SIGINT/SIGTERM
"""

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import Optional

from podcast_import.config import get_config
from podcast_import.errors import (
    ConfigLoadError,
    EmptySlugError,
    PersistError,
    RunCancelled,
)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CONFIG = 2
EXIT_PERSIST = 3
EXIT_PARTIAL_FETCH = 4
EXIT_CANCELLED = 130

logger = logging.getLogger("podcast_import")


def configure_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """
    Attach console and optional file handlers to the package logger.

    Args:
        verbose: Log DEBUG messages to the console
        log_file: Also write INFO and above to this file
    """
    if logger.handlers:
        return

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)


def _install_cancel_handlers(cancel_event: threading.Event) -> None:
    def _handler(signum, frame):
        logger.warning("Received signal %d, stopping before episode data is written", signum)
        cancel_event.set()

    signal.signal(signal.SIGINT, _handler)
    if hasattr(signal, "SIGTERM"):
        signal.signal(signal.SIGTERM, _handler)


def cmd_run(args) -> int:
    """Run the import pipeline."""
    from podcast_import.pipeline import run_import

    try:
        config = get_config(
            sources_file=args.sources,
            output_file=args.output,
            content_dir=args.content_dir,
            request_timeout=args.timeout,
            dedupe=False if args.no_dedupe else None,
        )
    except ValueError as exc:
        print(f"ERROR: Invalid configuration: {exc}")
        return EXIT_CONFIG

    configure_logging(verbose=args.verbose, log_file=config.log_file)

    cancel_event = threading.Event()
    _install_cancel_handlers(cancel_event)

    try:
        result = run_import(config=config, dry_run=args.dry_run, cancel_event=cancel_event)
    except ConfigLoadError as exc:
        logger.error("Error: %s", exc)
        return EXIT_CONFIG
    except PersistError as exc:
        logger.error("Error: %s", exc)
        return EXIT_PERSIST
    except RunCancelled as exc:
        logger.error("%s", exc)
        return EXIT_CANCELLED
    except Exception as exc:
        logger.exception("Error: %s", exc)
        return EXIT_ERROR

    # JSON output mode (for CI/automation)
    if args.output_json:
        print(result.to_json())
    elif args.dry_run:
        print("\n[dry-run] No files written.")

    if result.has_fetch_failures:
        return EXIT_PARTIAL_FETCH
    return EXIT_OK


def cmd_slug(args) -> int:
    """Print the folder name generated for a title."""
    from podcast_import.content.slug import slugify_title

    try:
        print(slugify_title(args.title))
    except EmptySlugError as exc:
        print(f"ERROR: {exc}")
        return EXIT_ERROR
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="podcast-import",
        description="Import podcast episodes into content documents and an episode data file",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run
    sub_run = subparsers.add_parser("run", help="Fetch sources and update content and data")
    sub_run.add_argument(
        "--sources",
        default=None,
        help="Source descriptor file (default: from config)",
    )
    sub_run.add_argument(
        "--output",
        default=None,
        help="Episode data file to update (default: from config)",
    )
    sub_run.add_argument(
        "--content-dir",
        default=None,
        help="Root directory for content documents (default: from config)",
    )
    sub_run.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Network timeout in seconds (default: from config)",
    )
    sub_run.add_argument(
        "--no-dedupe",
        action="store_true",
        default=False,
        help="Append every fetched episode, even if already recorded",
    )
    sub_run.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        help="Show what would happen without writing files",
    )
    sub_run.add_argument(
        "--output-json",
        action="store_true",
        default=False,
        help="Output result as JSON (for CI/automation)",
    )
    sub_run.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Detailed console output",
    )
    sub_run.set_defaults(func=cmd_run)

    # slug
    sub_slug = subparsers.add_parser("slug", help="Show the folder name for an episode title")
    sub_slug.add_argument("title", help="Episode title")
    sub_slug.set_defaults(func=cmd_slug)

    return parser


def main(argv=None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(EXIT_OK)

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
