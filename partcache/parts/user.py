"""Chat user and OAuth application parts."""

from __future__ import annotations

from datetime import datetime

from partcache.parts.part import Part, computed
from partcache.utils.snowflake import snowflake_to_datetime

INVITE_URL = (
    "https://lorhondel.valzargaming.com/oauth2/authorize"
    "?client_id={client_id}&scope=bot&permissions={permissions}"
)


class User(Part):
    fillable = ("id", "username", "discriminator", "avatar", "bot")

    @computed("mention")
    def _mention(self) -> str:
        return f"<@{self.key}>"

    @computed("tag")
    def _tag(self) -> str:
        return f"{self.attributes.get('username')}#{self.attributes.get('discriminator')}"

    @computed("created_at")
    def _created_at(self) -> datetime | None:
        return snowflake_to_datetime(self.key) if self.key is not None else None

    def __str__(self) -> str:
        return self.mention


class Application(Part):
    """The OAuth2 application of the bot.

    The ``owner`` payload is kept raw and hydrated into a User on read.
    """

    fillable = ("id", "name", "description", "icon", "rpc_origins", "flags")

    @computed("owner")
    def _owner(self) -> User | None:
        owner = self.extra.get("owner")
        if not owner:
            return None
        return self.factory.create(User, owner, created=True)

    @computed("invite_url")
    def _invite_url(self) -> str:
        return self.get_invite_url()

    def get_invite_url(self, permissions: int = 0) -> str:
        """Build the bot invite URL for a permission bitfield."""
        return INVITE_URL.format(client_id=self.key, permissions=permissions)
