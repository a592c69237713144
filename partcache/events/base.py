"""Base class for gateway event handlers.

A handler receives a decoded event payload and a one-shot future. It finds
the affected parts in the nested cache graph, mutates the graph and resolves
the future exactly once: with the affected part(s), or with the raw payload
when nothing was cached.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from partcache.cache import Cache
    from partcache.factory import Factory
    from partcache.http.client import ApiClient


class Event(ABC):
    """Stateless handler for one gateway event type."""

    def __init__(self, http: "ApiClient", factory: "Factory", cache: "Cache") -> None:
        self.http = http
        self.factory = factory
        self.cache = cache

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    async def handle(self, deferred: asyncio.Future, data: dict[str, Any]) -> None:
        """Apply the event and resolve deferred."""
        ...

    @staticmethod
    def resolve(deferred: asyncio.Future, value: Any) -> None:
        """Resolve deferred unless it already holds an outcome."""
        if not deferred.done():
            deferred.set_result(value)

    async def run(self, data: dict[str, Any]) -> asyncio.Future:
        """Run the handler and return its resolved future.

        The future always ends up done: a handler that returns without
        resolving yields the raw payload, and a handler that raises stores
        the exception for the awaiting caller.
        """
        deferred: asyncio.Future = asyncio.get_running_loop().create_future()
        try:
            await self.handle(deferred, data)
        except Exception as e:
            if deferred.done():
                raise
            deferred.set_exception(e)
        else:
            self.resolve(deferred, data)
        return deferred
