"""Guild, channel, message and thread repositories."""

from __future__ import annotations

from partcache.http import endpoint
from partcache.parts.guild import Channel, Guild
from partcache.parts.message import Message
from partcache.parts.thread import Thread, ThreadMember
from partcache.repository.base import AbstractRepository


class GuildRepository(AbstractRepository):
    part_class = Guild
    endpoints = {
        "all": endpoint.GUILDS,
        "get": endpoint.GUILD,
        "update": endpoint.GUILD,
    }


class ChannelRepository(AbstractRepository):
    """Channels of one guild (vars: guild_id)."""

    part_class = Channel
    endpoints = {
        "all": endpoint.GUILD_CHANNELS,
        "get": endpoint.CHANNEL,
        "create": endpoint.GUILD_CHANNELS,
        "update": endpoint.CHANNEL,
        "delete": endpoint.CHANNEL,
    }


class PrivateChannelRepository(AbstractRepository):
    """Direct message channels, not owned by any guild."""

    part_class = Channel
    endpoints = {
        "all": endpoint.PRIVATE_CHANNELS,
        "get": endpoint.CHANNEL,
        "create": endpoint.PRIVATE_CHANNELS,
        "delete": endpoint.CHANNEL,
    }


class MessageRepository(AbstractRepository):
    """Messages of one channel or thread (vars: channel_id)."""

    part_class = Message
    endpoints = {
        "all": endpoint.CHANNEL_MESSAGES,
        "get": endpoint.CHANNEL_MESSAGE,
        "create": endpoint.CHANNEL_MESSAGES,
        "update": endpoint.CHANNEL_MESSAGE,
        "delete": endpoint.CHANNEL_MESSAGE,
    }


class ThreadRepository(AbstractRepository):
    """Threads started under one channel (vars: channel_id)."""

    part_class = Thread
    endpoints = {
        "get": endpoint.THREAD,
        "create": endpoint.CHANNEL_THREADS,
        "update": endpoint.THREAD,
        "delete": endpoint.THREAD,
    }


class ThreadMemberRepository(AbstractRepository):
    """Members of one thread (vars: thread_id)."""

    part_class = ThreadMember
    endpoints = {
        "all": endpoint.THREAD_MEMBERS,
        "get": endpoint.THREAD_MEMBER,
        "delete": endpoint.THREAD_MEMBER,
    }
