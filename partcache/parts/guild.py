"""Guild and channel parts."""

from __future__ import annotations

from typing import Any

from partcache.parts.part import Part, computed


class Guild(Part):
    """A guild; owns its channel repository."""

    fillable = ("id", "name", "icon", "owner_id", "description")
    repository_attributes = {"guild_id": "id"}
    immutable = ("owner_id",)
    repositories = {"channels": "ChannelRepository"}


class Channel(Part):
    """A guild or private text channel; owns messages and threads."""

    fillable = (
        "id",
        "guild_id",
        "type",
        "name",
        "topic",
        "position",
        "parent_id",
        "nsfw",
        "last_message_id",
        "rate_limit_per_user",
    )
    repository_attributes = {"channel_id": "id"}
    immutable = ("guild_id", "type", "last_message_id")
    repositories = {
        "messages": "MessageRepository",
        "threads": "ThreadRepository",
    }

    def get_child_vars(self) -> dict[str, Any]:
        return {
            "channel_id": self.attributes.get("id"),
            "guild_id": self.attributes.get("guild_id"),
        }

    @computed("mention")
    def _mention(self) -> str:
        return f"<#{self.key}>"

    @computed("is_private")
    def _is_private(self) -> bool:
        return self.attributes.get("guild_id") is None

    @computed("guild")
    def _guild(self) -> Guild | None:
        cache = self.factory.cache
        guild_id = self.attributes.get("guild_id")
        if cache is None or guild_id is None:
            return None
        return cache.guilds.get(guild_id)
