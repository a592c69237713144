"""Endpoint templates for the remote API.

Templates are paths with named ``{placeholder}`` segments. Repositories bind
them from a part's repository attributes merged with the repository vars
before every request.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping
from urllib.parse import quote

from partcache.errors import EndpointBindingError

PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")

# -------------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------------

APPLICATION_CURRENT = "/oauth2/applications/@me"

PLAYERS = "/players"
PLAYER = "/players/{player_id}"

PARTIES = "/parties"
PARTY = "/parties/{party_id}"

GUILDS = "/users/@me/guilds"
GUILD = "/guilds/{guild_id}"
GUILD_CHANNELS = "/guilds/{guild_id}/channels"

PRIVATE_CHANNELS = "/users/@me/channels"
CHANNEL = "/channels/{channel_id}"
CHANNEL_MESSAGES = "/channels/{channel_id}/messages"
CHANNEL_MESSAGE = "/channels/{channel_id}/messages/{message_id}"
CHANNEL_THREADS = "/channels/{channel_id}/threads"

THREAD = "/channels/{thread_id}"
THREAD_MEMBERS = "/channels/{thread_id}/thread-members"
THREAD_MEMBER = "/channels/{thread_id}/thread-members/{user_id}"


def merge_vars(*maps: Mapping[str, Any]) -> dict[str, Any]:
    """Merge binding maps left to right; None never overwrites a value."""
    merged: dict[str, Any] = {}
    for mapping in maps:
        for key, value in mapping.items():
            if value is not None or key not in merged:
                merged[key] = value
    return merged


class Endpoint:
    """A path template bound into a concrete request path.

    Usage:
        endpoint = Endpoint(PLAYER).bind_assoc({"player_id": 42})
        str(endpoint)  # "/players/42"
    """

    def __init__(self, template: str) -> None:
        self.template = template
        self._bound: dict[str, str] = {}

    @property
    def placeholders(self) -> tuple[str, ...]:
        """Placeholder names in template order."""
        return tuple(PLACEHOLDER_RE.findall(self.template))

    @property
    def unbound(self) -> list[str]:
        return [name for name in self.placeholders if name not in self._bound]

    def bind(self, *args: Any) -> "Endpoint":
        """Bind placeholders positionally, in template order."""
        return self.bind_assoc(dict(zip(self.unbound, args)))

    def bind_assoc(self, variables: Mapping[str, Any]) -> "Endpoint":
        """Bind placeholders by name.

        Raises:
            EndpointBindingError: If any placeholder stays unresolved.
        """
        for name in self.unbound:
            value = variables.get(name)
            if value is not None:
                self._bound[name] = quote(str(value), safe="@")

        missing = self.unbound
        if missing:
            raise EndpointBindingError(self.template, missing)
        return self

    @classmethod
    def validate(cls, template: str, available: Iterable[str]) -> None:
        """Check at startup that a template can be bound from known keys."""
        keys = set(available)
        missing = [name for name in cls(template).placeholders if name not in keys]
        if missing:
            raise EndpointBindingError(template, missing)

    def __str__(self) -> str:
        return PLACEHOLDER_RE.sub(
            lambda m: self._bound.get(m.group(1), m.group(0)), self.template
        )

    def __repr__(self) -> str:
        return f"Endpoint({str(self)!r})"
