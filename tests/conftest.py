"""Shared fixtures for partcache tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from partcache.cache import Cache
from partcache.factory import Factory
from partcache.http.client import ApiClient
from partcache.parts.guild import Channel, Guild
from partcache.parts.message import Message


@pytest.fixture
def http() -> AsyncMock:
    """Mocked HTTP collaborator; each verb is an AsyncMock."""
    return AsyncMock(spec=ApiClient)


@pytest.fixture
def cache(http: AsyncMock) -> Cache:
    """Empty cache root wired to the mocked HTTP client."""
    return Cache(http)


@pytest.fixture
def factory(cache: Cache) -> Factory:
    return cache.factory


@pytest.fixture
def seeded_cache(cache: Cache) -> Cache:
    """Cache holding guild 1 -> channel 2 -> message 5, and private channel 3."""
    factory = cache.factory

    guild = factory.create(Guild, {"id": "1", "name": "Lorhondel"}, created=True)
    channel = guild.channels.create({"id": "2", "name": "general", "type": 0}, created=True)
    guild.channels.push(channel)
    channel.messages.push(
        channel.messages.create({"id": "5", "content": "hello"}, created=True),
        channel.messages.create({"id": "6", "content": "world"}, created=True),
    )
    cache.guilds.push(guild)

    dm = factory.create(Channel, {"id": "3", "type": 1}, created=True)
    dm.messages.push(factory.create(Message, {"id": "9", "channel_id": "3"}, created=True))
    cache.private_channels.push(dm)
    return cache
