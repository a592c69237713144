"""Player and party repositories."""

from __future__ import annotations

from partcache.http import endpoint
from partcache.parts.player import Party, Player
from partcache.repository.base import AbstractRepository


class PlayerRepository(AbstractRepository):
    part_class = Player
    endpoints = {
        "all": endpoint.PLAYERS,
        "get": endpoint.PLAYER,
        "create": endpoint.PLAYERS,
        "update": endpoint.PLAYER,
        "delete": endpoint.PLAYER,
    }

    def for_user(self, user_id: int | str) -> list[Player]:
        """Cached players owned by a chat user."""
        return self.filter(lambda p: str(p.attributes.get("user_id")) == str(user_id))


class PartyRepository(AbstractRepository):
    part_class = Party
    endpoints = {
        "all": endpoint.PARTIES,
        "get": endpoint.PARTY,
        "create": endpoint.PARTIES,
        "update": endpoint.PARTY,
        "delete": endpoint.PARTY,
    }
