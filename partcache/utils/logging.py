"""Logging setup for partcache.

All rich output goes through the one ``console`` defined here; the package
logger and the RichHandler share it so progress lines and log records do
not interleave badly. Call setup_logging() once from the entry point.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

console = Console()

# Chatty HTTP libraries, kept at WARNING unless debugging the transport
THIRD_PARTY_LOGGERS = ("httpx", "httpcore")

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _file_handler(path: str | Path) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    level: int | str = logging.INFO,
    log_file: str | Path | None = None,
    debug_third_party: bool = False,
) -> None:
    """Route the root logger to the shared console (and optionally a file).

    Args:
        level: Root level, as a number or a name such as "DEBUG"
        log_file: Also append plain-text records to this file
        debug_third_party: Let httpx/httpcore log at DEBUG
    """
    handlers: list[logging.Handler] = [
        RichHandler(console=console, show_path=False, rich_tracebacks=True)
    ]
    if log_file:
        handlers.append(_file_handler(log_file))

    logging.basicConfig(level=level, handlers=handlers, format="%(message)s", force=True)

    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug_third_party else logging.WARNING)
