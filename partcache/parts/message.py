"""Message and typing notification parts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from partcache.parts.part import Part, computed
from partcache.parts.user import User
from partcache.utils.time import from_unix, parse_iso8601

if TYPE_CHECKING:
    from partcache.parts.guild import Channel


def _lookup_channel(part: Part) -> "Channel | None":
    cache = part.factory.cache
    channel_id = part.attributes.get("channel_id")
    if cache is None or channel_id is None:
        return None
    return cache.find_channel(channel_id, part.attributes.get("guild_id"))


class Message(Part):
    """A message in a channel or thread.

    The ``author`` payload stays raw and is hydrated into a User on read.
    """

    fillable = (
        "id",
        "channel_id",
        "guild_id",
        "content",
        "timestamp",
        "edited_timestamp",
        "tts",
        "pinned",
        "type",
        "flags",
        "webhook_id",
    )
    repository_attributes = {"channel_id": "channel_id", "message_id": "id"}
    immutable = (
        "channel_id",
        "guild_id",
        "timestamp",
        "edited_timestamp",
        "type",
        "webhook_id",
        "tts",
    )

    @computed("channel")
    def _channel(self) -> "Channel | None":
        return _lookup_channel(self)

    @computed("author")
    def _author(self) -> User | None:
        author = self.extra.get("author")
        if not author:
            return None
        return self.factory.create(User, author, created=True)

    @computed("created_at")
    def _created_at(self) -> datetime | None:
        return parse_iso8601(self.attributes.get("timestamp"))

    @computed("edited_at")
    def _edited_at(self) -> datetime | None:
        return parse_iso8601(self.attributes.get("edited_timestamp"))


class TypingStart(Part):
    """A user started typing in a channel. Never persisted."""

    fillable = ("user_id", "channel_id", "guild_id", "timestamp")
    discriminator = "user_id"

    @computed("channel")
    def _channel(self) -> "Channel | None":
        return _lookup_channel(self)

    @computed("user")
    def _user(self) -> User | None:
        user = (self.extra.get("member") or {}).get("user")
        if not user:
            return None
        return self.factory.create(User, user, created=True)

    @computed("started_at")
    def _started_at(self) -> datetime | None:
        return from_unix(self.attributes.get("timestamp"))
