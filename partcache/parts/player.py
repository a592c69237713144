"""Player and party parts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from partcache.parts.part import Part, computed
from partcache.utils.snowflake import snowflake_to_datetime

if TYPE_CHECKING:
    from partcache.repository.base import AbstractRepository


def _top_level(part: Part, name: str) -> "AbstractRepository | None":
    cache = part.factory.cache
    return getattr(cache, name, None) if cache is not None else None


class Player(Part):
    """A character owned by a chat user.

    Attributes:
        id: Snowflake of the player
        user_id: Owning chat user
        party_id: Party the player belongs to, if any
        species: One of the playable species
        health, attack, defense, speed, skillpoints: Stats
    """

    fillable = (
        "id",
        "user_id",
        "party_id",
        "active",
        "species",
        "health",
        "attack",
        "defense",
        "speed",
        "skillpoints",
    )
    repository_attributes = {"player_id": "id"}
    immutable = ("user_id",)

    @computed("mention")
    def _mention(self) -> str:
        return f"<@{self.key}>"

    @computed("created_at")
    def _created_at(self) -> datetime | None:
        if self.key is None:
            return None
        return snowflake_to_datetime(self.key)

    @computed("party")
    def _party(self) -> "Party | None":
        parties = _top_level(self, "parties")
        party_id = self.attributes.get("party_id")
        if parties is None or party_id is None:
            return None
        return parties.get(party_id)

    def __str__(self) -> str:
        return self.mention


class Party(Part):
    """A group of up to five players.

    Members sit in the slots ``player1`` .. ``player5``; ``player1`` is the
    player who formed the party and leads it.
    """

    SLOTS = ("player1", "player2", "player3", "player4", "player5")

    fillable = ("id", "name", *SLOTS, "looking")
    repository_attributes = {"party_id": "id"}

    @property
    def member_ids(self) -> list[Any]:
        """Occupied slots in slot order."""
        return [
            self.attributes[slot]
            for slot in self.SLOTS
            if self.attributes.get(slot) is not None
        ]

    @computed("players")
    def _players(self) -> list[Player]:
        players = _top_level(self, "players")
        if players is None:
            return []
        return [p for p in (players.get(key) for key in self.member_ids) if p is not None]

    @computed("leader")
    def _leader(self) -> Player | None:
        players = _top_level(self, "players")
        leader_id = self.attributes.get("player1")
        if players is None or leader_id is None:
            return None
        return players.get(leader_id)

    @computed("full")
    def _full(self) -> bool:
        return len(self.member_ids) == len(self.SLOTS)
