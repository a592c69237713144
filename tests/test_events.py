"""Tests for the gateway event handlers."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import patch

import pytest

from partcache.cache import Cache
from partcache.events import (
    Event,
    MessageCreate,
    MessageDelete,
    MessageDeleteBulk,
    MessageUpdate,
    PlayerDelete,
    PlayerUpdate,
    ThreadCreate,
    ThreadDelete,
    TypingStart,
)
from partcache.parts import Message, Player, Thread, ThreadMember, User
from partcache.parts.message import TypingStart as TypingStartPart


def _handler(handler_cls: type[Event], cache: Cache) -> Event:
    return handler_cls(cache.http, cache.factory, cache)


async def _run(handler_cls: type[Event], cache: Cache, data: dict[str, Any]) -> Any:
    deferred = await _handler(handler_cls, cache).run(data)
    assert deferred.done()
    return deferred.result()


# ---------------------------------------------------------------------------
# TestEventRun
# ---------------------------------------------------------------------------


class Exploding(Event):
    async def handle(self, deferred: asyncio.Future, data: dict[str, Any]) -> None:
        raise KeyError("id")


class Silent(Event):
    async def handle(self, deferred: asyncio.Future, data: dict[str, Any]) -> None:
        return None


class Twice(Event):
    async def handle(self, deferred: asyncio.Future, data: dict[str, Any]) -> None:
        self.resolve(deferred, "first")
        self.resolve(deferred, "second")


class TestEventRun:
    """Event.run always hands back a settled future."""

    @pytest.mark.asyncio
    async def test_exception_is_stored_on_future(self, cache: Cache) -> None:
        deferred = await _handler(Exploding, cache).run({})

        assert deferred.done()
        with pytest.raises(KeyError):
            deferred.result()

    @pytest.mark.asyncio
    async def test_unresolved_handler_yields_payload(self, cache: Cache) -> None:
        data = {"id": "1"}

        assert await _run(Silent, cache, data) is data

    @pytest.mark.asyncio
    async def test_first_resolution_wins(self, cache: Cache) -> None:
        assert await _run(Twice, cache, {}) == "first"


# ---------------------------------------------------------------------------
# TestMessageEvents
# ---------------------------------------------------------------------------


class TestMessageCreate:
    @pytest.mark.asyncio
    async def test_caches_under_channel(self, seeded_cache: Cache) -> None:
        data = {
            "id": "7",
            "channel_id": "2",
            "guild_id": "1",
            "content": "new",
            "author": {"id": "8", "username": "valithor", "discriminator": "0001"},
        }

        message = await _run(MessageCreate, seeded_cache, data)

        channel = seeded_cache.find_channel("2", "1")
        assert isinstance(message, Message)
        assert message.created is True
        assert channel.messages.get("7") is message
        assert channel.last_message_id == "7"
        assert isinstance(message.author, User)
        assert message.channel is channel

    @pytest.mark.asyncio
    async def test_unknown_channel_still_resolves_message(self, seeded_cache: Cache) -> None:
        message = await _run(
            MessageCreate, seeded_cache, {"id": "7", "channel_id": "404", "guild_id": "1"}
        )

        assert isinstance(message, Message)
        assert message.channel is None


class TestMessageUpdate:
    @pytest.mark.asyncio
    async def test_fills_cached_message(self, seeded_cache: Cache) -> None:
        channel = seeded_cache.find_channel("2", "1")
        original = channel.messages.get("5")

        message = await _run(
            MessageUpdate,
            seeded_cache,
            {"id": "5", "channel_id": "2", "guild_id": "1", "content": "edited"},
        )

        assert message is original
        assert message.content == "edited"

    @pytest.mark.asyncio
    async def test_uncached_message_resolves_payload(self, seeded_cache: Cache) -> None:
        data = {"id": "404", "channel_id": "2", "guild_id": "1", "content": "edited"}

        assert await _run(MessageUpdate, seeded_cache, data) is data


class TestMessageDelete:
    """Tests for MessageDelete."""

    @pytest.mark.asyncio
    async def test_removes_cached_message(self, seeded_cache: Cache) -> None:
        channel = seeded_cache.find_channel("2", "1")
        cached = channel.messages.get("5")

        message = await _run(
            MessageDelete, seeded_cache, {"id": "5", "channel_id": "2", "guild_id": "1"}
        )

        assert message is cached
        assert message.created is False
        assert message.deleted is True
        assert "5" not in channel.messages
        assert "6" in channel.messages

    @pytest.mark.asyncio
    async def test_private_channel_without_guild(self, seeded_cache: Cache) -> None:
        message = await _run(MessageDelete, seeded_cache, {"id": "9", "channel_id": "3"})

        assert isinstance(message, Message)
        assert len(seeded_cache.find_channel("3").messages) == 0

    @pytest.mark.asyncio
    async def test_uncached_guild_resolves_payload(self, cache: Cache) -> None:
        data = {"id": "5", "channel_id": "2", "guild_id": "1"}

        with patch("partcache.events.message.logger") as mock_logger:
            result = await _run(MessageDelete, cache, data)

        assert result is data
        mock_logger.event_miss.assert_called_once_with("MessageDelete", data)

    @pytest.mark.asyncio
    async def test_uncached_message_resolves_payload(self, seeded_cache: Cache) -> None:
        data = {"id": "404", "channel_id": "2", "guild_id": "1"}

        assert await _run(MessageDelete, seeded_cache, data) is data


class TestMessageDeleteBulk:
    """Tests for MessageDeleteBulk."""

    @pytest.mark.asyncio
    async def test_resolves_one_result_per_id_in_order(self, seeded_cache: Cache) -> None:
        channel = seeded_cache.find_channel("2", "1")
        cached = [channel.messages.get("6"), channel.messages.get("5")]

        results = await _run(
            MessageDeleteBulk,
            seeded_cache,
            {"ids": ["6", "404", "5"], "channel_id": "2", "guild_id": "1"},
        )

        assert len(results) == 3
        assert results[0] is cached[0]
        assert results[1] == {"id": "404", "channel_id": "2", "guild_id": "1"}
        assert results[2] is cached[1]
        assert len(channel.messages) == 0

    @pytest.mark.asyncio
    async def test_empty_ids(self, seeded_cache: Cache) -> None:
        results = await _run(
            MessageDeleteBulk, seeded_cache, {"ids": [], "channel_id": "2", "guild_id": "1"}
        )

        assert results == []


# ---------------------------------------------------------------------------
# TestThreadEvents
# ---------------------------------------------------------------------------


def _thread_payload(**overrides: Any) -> dict[str, Any]:
    data = {"id": "20", "parent_id": "2", "guild_id": "1", "name": "quest", "type": 11}
    data.update(overrides)
    return data


class TestThreadCreate:
    """Tests for ThreadCreate."""

    @pytest.mark.asyncio
    async def test_attaches_under_parent(self, seeded_cache: Cache) -> None:
        thread = await _run(ThreadCreate, seeded_cache, _thread_payload())

        channel = seeded_cache.find_channel("2", "1")
        assert isinstance(thread, Thread)
        assert channel.threads.get("20") is thread
        assert thread.parent is channel
        assert thread.messages.vars["channel_id"] == "20"

    @pytest.mark.asyncio
    async def test_caches_members(self, seeded_cache: Cache) -> None:
        data = _thread_payload(
            members=[{"user_id": "8"}, {"user_id": "9"}],
            member={"user_id": "10", "join_timestamp": "2024-01-01T00:00:00+00:00"},
        )

        thread = await _run(ThreadCreate, seeded_cache, data)

        assert thread.members.keys() == ["8", "9", "10"]
        member = thread.members.get("10")
        assert isinstance(member, ThreadMember)
        assert member.id == "20"
        assert member.joined_at.year == 2024

    @pytest.mark.asyncio
    async def test_member_without_user_id_is_skipped(self, seeded_cache: Cache) -> None:
        data = _thread_payload(
            members=[{"user_id": "8"}], member={"join_timestamp": "2024-01-01T00:00:00+00:00"}
        )

        with patch("partcache.events.thread.logger") as mock_logger:
            thread = await _run(ThreadCreate, seeded_cache, data)

        assert thread.members.keys() == ["8"]
        assert seeded_cache.find_channel("20", "1") is thread
        mock_logger.event_miss.assert_called_once_with("ThreadCreate", data["member"])

    @pytest.mark.asyncio
    async def test_existing_thread_is_kept(self, seeded_cache: Cache) -> None:
        first = await _run(ThreadCreate, seeded_cache, _thread_payload())

        second = await _run(ThreadCreate, seeded_cache, _thread_payload(name="renamed"))

        assert second is first
        assert first.name == "quest"
        assert len(seeded_cache.find_channel("2", "1").threads) == 1

    @pytest.mark.asyncio
    async def test_unknown_parent_resolves_unattached_thread(self, seeded_cache: Cache) -> None:
        thread = await _run(ThreadCreate, seeded_cache, _thread_payload(parent_id="404"))

        assert isinstance(thread, Thread)
        assert thread.parent is None
        assert seeded_cache.find_channel("20", "1") is None


class TestThreadDelete:
    @pytest.mark.asyncio
    async def test_removes_thread(self, seeded_cache: Cache) -> None:
        created = await _run(ThreadCreate, seeded_cache, _thread_payload())

        thread = await _run(
            ThreadDelete, seeded_cache, {"id": "20", "parent_id": "2", "guild_id": "1"}
        )

        assert thread is created
        assert thread.deleted is True
        assert thread.created is False
        assert seeded_cache.find_channel("20", "1") is None

    @pytest.mark.asyncio
    async def test_uncached_thread_resolves_payload(self, seeded_cache: Cache) -> None:
        data = {"id": "20", "parent_id": "2", "guild_id": "1"}

        assert await _run(ThreadDelete, seeded_cache, data) is data


# ---------------------------------------------------------------------------
# TestTypingStart
# ---------------------------------------------------------------------------


class TestTypingStart:
    @pytest.mark.asyncio
    async def test_hydrates_notification_without_caching(self, seeded_cache: Cache) -> None:
        data = {
            "user_id": "8",
            "channel_id": "2",
            "guild_id": "1",
            "timestamp": 1700000000,
            "member": {"user": {"id": "8", "username": "valithor"}},
        }

        typing = await _run(TypingStart, seeded_cache, data)

        assert isinstance(typing, TypingStartPart)
        assert typing.key == "8"
        assert typing.channel is seeded_cache.find_channel("2", "1")
        assert typing.user.key == "8"
        assert typing.started_at.year == 2023
        assert seeded_cache.stats()["players"] == 0


# ---------------------------------------------------------------------------
# TestPlayerEvents
# ---------------------------------------------------------------------------


class TestPlayerUpdate:
    @pytest.mark.asyncio
    async def test_caches_new_player(self, cache: Cache) -> None:
        player = await _run(PlayerUpdate, cache, {"id": "7", "health": 3})

        assert isinstance(player, Player)
        assert cache.players.get("7") is player

    @pytest.mark.asyncio
    async def test_merges_into_cached_player(self, cache: Cache) -> None:
        cached = cache.players.create({"id": "7", "health": 3}, created=True)
        cache.players.push(cached)

        player = await _run(PlayerUpdate, cache, {"id": "7", "health": 9})

        assert player is cached
        assert player.health == 9


class TestPlayerDelete:
    @pytest.mark.asyncio
    async def test_removes_player(self, cache: Cache) -> None:
        cache.players.push(cache.players.create({"id": "7"}, created=True))

        player = await _run(PlayerDelete, cache, {"id": "7"})

        assert player.deleted is True
        assert "7" not in cache.players

    @pytest.mark.asyncio
    async def test_uncached_player_resolves_payload(self, cache: Cache) -> None:
        data = {"id": "7"}

        assert await _run(PlayerDelete, cache, data) is data
