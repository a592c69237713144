"""Rich building blocks shared by the package logger.

- StructuredBlock: timed, indented key-value output for one unit of work
- BasePipelineLogger: logging delegation plus a summary panel
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from partcache.utils.logging import console

Row = tuple[str, Any]

INDENT = "    "
OK = "[green]✓[/green]"
FAIL = "[red]✗[/red]"


class StructuredBlock:
    """Indented output for one repository (or any unit of work).

    Usage:
        with logger.block("players") as block:
            block.field("endpoint", "/players")
            block.result("cached 42 parts")

    A block left by an exception prints a failure line with the error.
    """

    def __init__(self, title: str, console: Console) -> None:
        self.title = title
        self.console = console
        self.started = time.monotonic()
        self.finished = False

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.started

    def _line(self, text: str) -> None:
        self.console.print(f"{INDENT}{text}")

    def field(self, key: str, value: Any, color: str | None = None) -> None:
        rendered = f"[{color}]{value}[/{color}]" if color else str(value)
        self._line(f"[dim]{key}:[/dim] {rendered}")

    def result(self, message: str, success: bool = True) -> None:
        self.finished = True
        self._line(f"{OK if success else FAIL} {message} [dim]({self.elapsed:.2f}s)[/dim]")

    def skip(self, reason: str) -> None:
        self.finished = True
        self._line(f"[dim]Skipped: {reason}[/dim]")


class BasePipelineLogger(ABC):
    """Base for rich loggers: python logging plus console panels.

    Subclasses add their domain events and implement summary().
    """

    def __init__(self, logger_name: str | None = None) -> None:
        self.console: Console = console
        self._logger = logging.getLogger(logger_name or type(self).__module__)

    @contextmanager
    def block(self, title: str) -> Iterator[StructuredBlock]:
        """Open a structured block; see StructuredBlock."""
        self.console.print(f"\n[bold]{title}[/bold]")
        block = StructuredBlock(title, self.console)
        try:
            yield block
        except Exception as e:
            if not block.finished:
                block.result(f"{type(e).__name__}: {e}", success=False)
            raise

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)

    def debug(self, message: str) -> None:
        self._logger.debug(message)

    def success(self, message: str) -> None:
        """Print a checkmarked line straight to the console."""
        self.console.print(f"{OK} {message}")

    # -------------------------------------------------------------------------
    # Summary panel
    # -------------------------------------------------------------------------

    @staticmethod
    def _summary_rows(
        stats: Mapping[str, Any],
        sections: Mapping[str, Mapping[str, Any]] | None,
        elapsed: float,
    ) -> list[Row]:
        rows: list[Row] = list(stats.items())
        for section, values in (sections or {}).items():
            rows.append((f"[dim]{section}[/dim]", ""))
            rows.extend((f"  {label}", value) for label, value in values.items())
        rows.append(("Time elapsed", f"{elapsed:.1f}s"))
        return rows

    def print_summary(
        self,
        name: str,
        *,
        elapsed: float,
        stats: Mapping[str, Any],
        extra_sections: Mapping[str, Mapping[str, Any]] | None = None,
        style: str = "cyan",
    ) -> None:
        """Print a "<name> Complete" panel.

        Integer values are printed with thousands separators; extra_sections
        are rendered as indented groups under their heading.
        """
        grid = Table.grid(padding=(0, 2))
        grid.add_column(style="bold")
        grid.add_column(justify="right", style="green")
        for label, value in self._summary_rows(stats, extra_sections, elapsed):
            grid.add_row(label, f"{value:,}" if isinstance(value, int) else str(value))

        self.console.print()
        self.console.print(
            Panel(grid, title=f"[bold]{name} Complete[/bold]", border_style=style, padding=(1, 2))
        )

    @abstractmethod
    def summary(self, **kwargs: Any) -> None:
        ...
