"""Message event handlers."""

from __future__ import annotations

import asyncio
from typing import Any

from partcache.events.base import Event
from partcache.logger import logger
from partcache.parts.message import Message


class MessageCreate(Event):
    """MESSAGE_CREATE: cache the message under its channel."""

    async def handle(self, deferred: asyncio.Future, data: dict[str, Any]) -> None:
        message = self.factory.create(Message, data, created=True)

        channel = self.cache.find_channel(data.get("channel_id"), data.get("guild_id"))
        if channel is not None:
            channel.messages.push(message)
            channel.set("last_message_id", message.key)
        else:
            logger.event_miss(self.name, data)

        self.resolve(deferred, message)


class MessageUpdate(Event):
    """MESSAGE_UPDATE: merge the changes into the cached message."""

    async def handle(self, deferred: asyncio.Future, data: dict[str, Any]) -> None:
        message = None

        channel = self.cache.find_channel(data.get("channel_id"), data.get("guild_id"))
        if channel is not None:
            message = channel.messages.get(data["id"])
            if message is not None:
                message.fill(data)

        if message is None:
            logger.event_miss(self.name, data)
        self.resolve(deferred, message if message is not None else data)


class MessageDelete(Event):
    """MESSAGE_DELETE: remove the message from its channel.

    Lookup walks guild -> channel -> message (private channels when the
    payload has no guild_id). Any missing link resolves with the payload.
    """

    async def handle(self, deferred: asyncio.Future, data: dict[str, Any]) -> None:
        message = None

        channel = self.cache.find_channel(data.get("channel_id"), data.get("guild_id"))
        if channel is not None:
            message = channel.messages.pull(data["id"])

        if message is None:
            logger.event_miss(self.name, data)
            self.resolve(deferred, data)
            return

        message.created = False
        message.deleted = True
        self.resolve(deferred, message)


class MessageDeleteBulk(Event):
    """MESSAGE_DELETE_BULK: one MessageDelete per id, joined in order."""

    async def handle(self, deferred: asyncio.Future, data: dict[str, Any]) -> None:
        loop = asyncio.get_running_loop()
        single = MessageDelete(self.http, self.factory, self.cache)

        futures: list[asyncio.Future] = []
        handlers = []
        for message_id in data.get("ids", []):
            future = loop.create_future()
            futures.append(future)
            handlers.append(
                single.handle(
                    future,
                    {
                        "id": message_id,
                        "channel_id": data.get("channel_id"),
                        "guild_id": data.get("guild_id"),
                    },
                )
            )

        await asyncio.gather(*handlers)
        messages = await asyncio.gather(*futures)
        self.resolve(deferred, list(messages))
