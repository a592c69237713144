"""Cached remote entities."""

from partcache.parts.guild import Channel, Guild
from partcache.parts.message import Message, TypingStart
from partcache.parts.part import Part, computed
from partcache.parts.player import Party, Player
from partcache.parts.thread import Thread, ThreadMember
from partcache.parts.user import Application, User

__all__ = [
    "Application",
    "Channel",
    "Guild",
    "Message",
    "Part",
    "Party",
    "Player",
    "Thread",
    "ThreadMember",
    "TypingStart",
    "User",
    "computed",
]
