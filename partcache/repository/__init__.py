"""Repositories: keyed part caches synchronized with the API."""

from partcache.repository.base import REPOSITORIES, AbstractRepository, repository_class
from partcache.repository.channel import (
    ChannelRepository,
    GuildRepository,
    MessageRepository,
    PrivateChannelRepository,
    ThreadMemberRepository,
    ThreadRepository,
)
from partcache.repository.player import PartyRepository, PlayerRepository

__all__ = [
    "REPOSITORIES",
    "AbstractRepository",
    "ChannelRepository",
    "GuildRepository",
    "MessageRepository",
    "PartyRepository",
    "PlayerRepository",
    "PrivateChannelRepository",
    "ThreadMemberRepository",
    "ThreadRepository",
    "repository_class",
]
