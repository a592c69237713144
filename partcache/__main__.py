"""CLI entry point for partcache.

Usage:
    python -m partcache                         # Freshen repositories from config
    python -m partcache --freshen players       # Freshen a specific repository
    python -m partcache --verbose               # Show more details
    python -m partcache --debug                 # Show debug info
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from partcache.config.settings import TOP_LEVEL_REPOSITORIES
from partcache.logger import logger
from partcache.run import run_sync
from partcache.utils.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Remote entity cache sync",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m partcache
      Freshen the repositories listed in config.json (freshen_on_start)

  python -m partcache --freshen players --freshen parties
      Freshen only the given repositories

  python -m partcache --config /path/to/config.json --debug
      Use a custom config file with third-party debug logging
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        default="config.json",
        help="Path to config.json (default: config.json)",
    )
    parser.add_argument(
        "--freshen",
        action="append",
        choices=TOP_LEVEL_REPOSITORIES,
        help="Repository to freshen (repeatable)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (DEBUG level)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with third-party library logs",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Optional file to write logs to",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.debug or args.verbose else logging.INFO,
        log_file=args.log_file,
        debug_third_party=args.debug,
    )

    logger.info("Starting cache sync")

    try:
        asyncio.run(run_sync(config_path=args.config, repositories=args.freshen))
        logger.success("Sync complete!")
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        raise


if __name__ == "__main__":
    main()
