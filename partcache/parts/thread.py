"""Thread parts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from partcache.parts.part import Part, computed
from partcache.utils.time import parse_iso8601

if TYPE_CHECKING:
    from partcache.parts.guild import Channel


class Thread(Part):
    """A thread under a parent channel; owns members and messages."""

    fillable = (
        "id",
        "guild_id",
        "parent_id",
        "owner_id",
        "type",
        "name",
        "last_message_id",
        "message_count",
        "member_count",
        "rate_limit_per_user",
        "thread_metadata",
    )
    repository_attributes = {"thread_id": "id"}
    immutable = ("guild_id", "parent_id", "owner_id", "type", "message_count", "member_count")
    repositories = {
        "members": "ThreadMemberRepository",
        "messages": "MessageRepository",
    }

    def get_child_vars(self) -> dict[str, Any]:
        return {
            "thread_id": self.attributes.get("id"),
            "channel_id": self.attributes.get("id"),
            "guild_id": self.attributes.get("guild_id"),
        }

    @computed("parent")
    def _parent(self) -> "Channel | None":
        cache = self.factory.cache
        parent_id = self.attributes.get("parent_id")
        if cache is None or parent_id is None:
            return None
        return cache.find_channel(parent_id, self.attributes.get("guild_id"))

    @computed("archived")
    def _archived(self) -> bool:
        return bool((self.attributes.get("thread_metadata") or {}).get("archived"))


class ThreadMember(Part):
    """A user's membership in a thread, keyed by user id."""

    fillable = ("id", "user_id", "join_timestamp", "flags")
    discriminator = "user_id"
    repository_attributes = {"user_id": "user_id"}
    immutable = ("id", "join_timestamp")

    @computed("joined_at")
    def _joined_at(self) -> datetime | None:
        return parse_iso8601(self.attributes.get("join_timestamp"))
