"""Tests for partcache.factory."""

from __future__ import annotations

from unittest.mock import AsyncMock

from partcache.factory import Factory
from partcache.parts import Channel, Guild, Player, Thread
from partcache.repository import (
    ChannelRepository,
    MessageRepository,
    PlayerRepository,
    ThreadMemberRepository,
    ThreadRepository,
)


class TestCreate:
    """Tests for Factory.create."""

    def test_sets_created_flag(self, factory: Factory) -> None:
        assert factory.create(Player, {"id": "1"}, created=True).created is True
        assert factory.create(Player, {"id": "1"}).created is False

    def test_injects_shared_dependencies(self, factory: Factory, http: AsyncMock) -> None:
        player = factory.create(Player, {"id": "1"})

        assert player.factory is factory
        assert player.http is http

    def test_wires_child_repositories_with_parent_vars(self, factory: Factory) -> None:
        guild = factory.create(Guild, {"id": "1"}, created=True)

        assert isinstance(guild.channels, ChannelRepository)
        assert guild.channels.vars == {"guild_id": "1"}
        assert guild.channels.http is factory.http

    def test_channel_owns_messages_and_threads(self, factory: Factory) -> None:
        channel = factory.create(Channel, {"id": "2", "guild_id": "1"}, created=True)

        assert isinstance(channel.messages, MessageRepository)
        assert isinstance(channel.threads, ThreadRepository)
        assert channel.messages.vars == {"channel_id": "2", "guild_id": "1"}

    def test_thread_messages_scoped_to_thread(self, factory: Factory) -> None:
        thread = factory.create(Thread, {"id": "20", "parent_id": "2", "guild_id": "1"})

        assert isinstance(thread.members, ThreadMemberRepository)
        assert thread.messages.vars["channel_id"] == "20"
        assert thread.members.vars["thread_id"] == "20"

    def test_identical_data_yields_independent_parts(self, factory: Factory) -> None:
        data = {"id": "2", "guild_id": "1", "name": "general"}

        first = factory.create(Channel, data, created=True)
        second = factory.create(Channel, data, created=True)

        assert first is not second
        assert first.to_dict() == second.to_dict()
        assert first.messages is not second.messages

    def test_fill_after_save_updates_child_vars(self, factory: Factory) -> None:
        """A transient parent learns its id on save; children follow."""
        guild = factory.create(Guild, {"name": "new"})
        assert guild.channels.vars == {"guild_id": None}

        guild.fill({"id": "77"})

        assert guild.channels.vars == {"guild_id": "77"}


class TestRepository:
    """Tests for Factory.repository."""

    def test_builds_repository_with_vars(self, factory: Factory) -> None:
        repository = factory.repository(PlayerRepository, {"realm": "eu"})

        assert repository.factory is factory
        assert repository.vars == {"realm": "eu"}
