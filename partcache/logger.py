"""Rich-based logger for the cache layer.

Extends BasePipelineLogger with request, rate limit and event output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from partcache.utils.pipeline_logger import BasePipelineLogger

if TYPE_CHECKING:
    from partcache.http.client import RateLimit


class CacheLogger(BasePipelineLogger):
    """Logger for repository, HTTP and event activity."""

    def __init__(self) -> None:
        super().__init__(__name__)

    # -------------------------------------------------------------------------
    # HTTP: Rate Limiting & Retries
    # -------------------------------------------------------------------------

    def rate_limit(self, rate_limit: "RateLimit") -> None:
        """Log a rate limit warning with retry time."""
        self._logger.warning(f"{rate_limit}. Waiting {rate_limit.retry_after:.1f}s...")

    def retry(
        self, attempt: int, max_attempts: int, wait_time: float, reason: str = ""
    ) -> None:
        """Log a retry attempt with optional reason."""
        msg = f"Retry {attempt}/{max_attempts} in {wait_time:.1f}s"
        if reason:
            msg += f" ({reason})"
        self._logger.warning(msg)

    def request(self, method: str, path: str) -> None:
        self._logger.debug(f"{method} {path}")

    # -------------------------------------------------------------------------
    # Repositories & Events
    # -------------------------------------------------------------------------

    def freshened(self, repository: str, count: int) -> None:
        """Log a completed repository freshen."""
        self._logger.debug(f"Freshened {repository}: {count:,} parts cached")

    def event_miss(self, event: str, data: Any) -> None:
        """Log an event whose target was not in the cache."""
        self._logger.debug(f"{event}: no cached target, resolving raw payload {data!r}")

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------

    def summary(
        self,
        repositories: dict[str, int] | None = None,
        elapsed: float = 0.0,
        **kwargs: Any,
    ) -> None:
        """Print final sync summary."""
        repositories = repositories or {}
        self.print_summary(
            "Sync",
            elapsed=elapsed,
            stats={
                "Repositories": len(repositories),
                "Parts cached": sum(repositories.values()),
            },
            extra_sections={"Cached per repository": repositories} if repositories else None,
            style="cyan",
        )


# Global logger instance
logger = CacheLogger()
