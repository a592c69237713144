"""Root of the nested cache graph.

The cache owns the top-level repositories, the factory and the event
dispatcher. Every nested repository (a guild's channels, a channel's
messages) is owned by the part it hangs off; parts find their parents by
key lookup through this root rather than holding references to them.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from partcache.config.settings import TOP_LEVEL_REPOSITORIES
from partcache.errors import UnsupportedOperation
from partcache.events.dispatcher import EventDispatcher
from partcache.factory import Factory
from partcache.http import endpoint
from partcache.parts.guild import Channel
from partcache.parts.thread import Thread
from partcache.parts.user import Application
from partcache.repository import (
    GuildRepository,
    PartyRepository,
    PlayerRepository,
    PrivateChannelRepository,
)

if TYPE_CHECKING:
    from partcache.http.client import ApiClient
    from partcache.repository.base import AbstractRepository


class Cache:
    """Local mirror of the remote API state."""

    def __init__(self, http: "ApiClient") -> None:
        self.http = http
        self.factory = Factory(http, self)

        self.players = self.factory.repository(PlayerRepository)
        self.parties = self.factory.repository(PartyRepository)
        self.guilds = self.factory.repository(GuildRepository)
        self.private_channels = self.factory.repository(PrivateChannelRepository)

        self.application: Application | None = None
        self.dispatcher = EventDispatcher(http, self.factory, self)

    def repository(self, name: str) -> "AbstractRepository":
        """Return a top-level repository by name.

        Raises:
            UnsupportedOperation: If the cache has no such repository.
        """
        if name not in TOP_LEVEL_REPOSITORIES:
            raise UnsupportedOperation(f"Unknown repository {name!r}")
        return getattr(self, name)

    async def load_application(self) -> Application:
        """Fetch the current OAuth application into the cache."""
        response = await self.http.get(endpoint.APPLICATION_CURRENT)
        self.application = self.factory.create(Application, response or {}, created=True)
        return self.application

    async def freshen(self, *names: str) -> dict[str, int]:
        """Freshen top-level repositories concurrently.

        Args:
            names: Repository names; defaults to every top-level repository.

        Returns:
            Cached part count per freshened repository.
        """
        repositories = [self.repository(name) for name in names or TOP_LEVEL_REPOSITORIES]
        await asyncio.gather(*(repository.freshen() for repository in repositories))
        return {
            name: len(repository)
            for name, repository in zip(names or TOP_LEVEL_REPOSITORIES, repositories)
        }

    def find_channel(self, channel_id: Any, guild_id: Any = None) -> Channel | Thread | None:
        """Resolve a channel or thread from the cache.

        Walks guild -> channels -> threads when guild_id is given, otherwise
        looks in the private channels.
        """
        if guild_id is None:
            return self.private_channels.get(channel_id)

        guild = self.guilds.get(guild_id)
        if guild is None:
            return None

        channel = guild.channels.get(channel_id)
        if channel is not None:
            return channel

        for parent in guild.channels:
            thread = parent.threads.get(channel_id)
            if thread is not None:
                return thread
        return None

    async def dispatch(self, event_type: str, data: dict[str, Any]) -> Any:
        """Apply a gateway event to the cache. See EventDispatcher.dispatch."""
        return await self.dispatcher.dispatch(event_type, data)

    def stats(self) -> dict[str, int]:
        """Cached part count per top-level repository."""
        return {name: len(getattr(self, name)) for name in TOP_LEVEL_REPOSITORIES}
