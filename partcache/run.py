"""Sync orchestration: open the API client, build the cache, freshen it."""

from __future__ import annotations

import time

from partcache.cache import Cache
from partcache.config.settings import AppSettings, load_config
from partcache.http.client import ApiClient
from partcache.logger import logger


def make_client(settings: AppSettings) -> ApiClient:
    """Build an API client from settings."""
    return ApiClient(
        token=settings.token,
        user_agent=settings.user_agent,
        base_url=settings.api_base_url,
        timeout=settings.timeout,
        max_retries=settings.max_retries,
        max_rate_limit_retries=settings.max_rate_limit_retries,
    )


async def sync(cache: Cache, settings: AppSettings, repositories: list[str]) -> dict[str, int]:
    """Load the application (if configured) and freshen repositories."""
    if settings.load_application:
        application = await cache.load_application()
        logger.info(f"Application: {application.attributes.get('name')} ({application.key})")

    counts: dict[str, int] = {}
    for name in repositories:
        with logger.block(name) as block:
            repository = cache.repository(name)
            block.field("endpoint", repository.endpoints.get("all", "-"))
            await repository.freshen()
            counts[name] = len(repository)
            block.result(f"cached {counts[name]:,} parts")
    return counts


async def run_sync(
    config_path: str = "config.json",
    repositories: list[str] | None = None,
) -> Cache:
    """Entry point for a one-shot sync run."""
    settings = load_config(config_path)
    names = repositories or settings.freshen_on_start
    start = time.time()

    async with make_client(settings) as http:
        cache = Cache(http)
        counts = await sync(cache, settings, names)

    logger.summary(repositories=counts, elapsed=time.time() - start)
    return cache
