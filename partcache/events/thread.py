"""Thread event handlers."""

from __future__ import annotations

import asyncio
from typing import Any

from partcache.events.base import Event
from partcache.logger import logger
from partcache.parts.thread import Thread, ThreadMember


class ThreadCreate(Event):
    """THREAD_CREATE: attach the new thread under its parent channel.

    A thread already cached under the parent is left untouched and resolved
    as-is.
    """

    async def handle(self, deferred: asyncio.Future, data: dict[str, Any]) -> None:
        thread = self.factory.create(Thread, data, created=True)

        parent = thread.parent
        if parent is None:
            logger.event_miss(self.name, data)
            self.resolve(deferred, thread)
            return

        existing = parent.threads.get(thread.key)
        if existing is not None:
            self.resolve(deferred, existing)
            return

        members = list(data.get("members") or [])
        if data.get("member"):
            members.append(data["member"])
        for member in members:
            if member.get("user_id") is None:
                logger.event_miss(self.name, member)
                continue
            thread.members.push(
                self.factory.create(ThreadMember, {"id": thread.key, **member}, created=True)
            )

        parent.threads.push(thread)
        self.resolve(deferred, thread)


class ThreadDelete(Event):
    """THREAD_DELETE: remove the thread from its parent channel."""

    async def handle(self, deferred: asyncio.Future, data: dict[str, Any]) -> None:
        thread = None

        parent = self.cache.find_channel(data.get("parent_id"), data.get("guild_id"))
        if parent is not None:
            thread = parent.threads.pull(data["id"])

        if thread is None:
            logger.event_miss(self.name, data)
            self.resolve(deferred, data)
            return

        thread.created = False
        thread.deleted = True
        self.resolve(deferred, thread)
