"""Gateway event handlers that keep the cache in sync."""

from partcache.events.base import Event
from partcache.events.dispatcher import HANDLERS, EventDispatcher
from partcache.events.message import (
    MessageCreate,
    MessageDelete,
    MessageDeleteBulk,
    MessageUpdate,
)
from partcache.events.misc import PlayerDelete, PlayerUpdate, TypingStart
from partcache.events.thread import ThreadCreate, ThreadDelete

__all__ = [
    "HANDLERS",
    "Event",
    "EventDispatcher",
    "MessageCreate",
    "MessageDelete",
    "MessageDeleteBulk",
    "MessageUpdate",
    "PlayerDelete",
    "PlayerUpdate",
    "ThreadCreate",
    "ThreadDelete",
    "TypingStart",
]
