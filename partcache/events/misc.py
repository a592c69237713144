"""Typing and player event handlers."""

from __future__ import annotations

import asyncio
from typing import Any

from partcache.events.base import Event
from partcache.logger import logger
from partcache.parts.message import TypingStart as TypingStartPart
from partcache.parts.player import Player


class TypingStart(Event):
    """TYPING_START: hydrate the notification; nothing is cached."""

    async def handle(self, deferred: asyncio.Future, data: dict[str, Any]) -> None:
        self.resolve(deferred, self.factory.create(TypingStartPart, data, created=True))


class PlayerUpdate(Event):
    """PLAYER_UPDATE: merge into the cached player, caching it if new."""

    async def handle(self, deferred: asyncio.Future, data: dict[str, Any]) -> None:
        player = self.cache.players.get(data["id"])
        if player is None:
            player = self.factory.create(Player, data, created=True)
            self.cache.players.push(player)
        else:
            player.fill(data)
            player.created = True
            player.deleted = False
        self.resolve(deferred, player)


class PlayerDelete(Event):
    """PLAYER_DELETE: remove the player from the cache."""

    async def handle(self, deferred: asyncio.Future, data: dict[str, Any]) -> None:
        player = self.cache.players.pull(data["id"])
        if player is None:
            logger.event_miss(self.name, data)
            self.resolve(deferred, data)
            return

        player.created = False
        player.deleted = True
        self.resolve(deferred, player)
