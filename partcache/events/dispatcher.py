"""Routes gateway events to their handlers.

The event tag -> handler table is explicit; unknown tags are rejected
rather than guessed.
"""

from __future__ import annotations

import inspect
from collections import defaultdict
from typing import TYPE_CHECKING, Any, Callable

from partcache.errors import UnsupportedOperation
from partcache.events.base import Event
from partcache.events.message import (
    MessageCreate,
    MessageDelete,
    MessageDeleteBulk,
    MessageUpdate,
)
from partcache.events.misc import PlayerDelete, PlayerUpdate, TypingStart
from partcache.events.thread import ThreadCreate, ThreadDelete

if TYPE_CHECKING:
    from partcache.cache import Cache
    from partcache.factory import Factory
    from partcache.http.client import ApiClient


HANDLERS: dict[str, type[Event]] = {
    "MESSAGE_CREATE": MessageCreate,
    "MESSAGE_UPDATE": MessageUpdate,
    "MESSAGE_DELETE": MessageDelete,
    "MESSAGE_DELETE_BULK": MessageDeleteBulk,
    "THREAD_CREATE": ThreadCreate,
    "THREAD_DELETE": ThreadDelete,
    "TYPING_START": TypingStart,
    "PLAYER_UPDATE": PlayerUpdate,
    "PLAYER_DELETE": PlayerDelete,
}

Listener = Callable[[Any], Any]


class EventDispatcher:
    """Applies events to the cache and notifies listeners with the result."""

    def __init__(self, http: "ApiClient", factory: "Factory", cache: "Cache") -> None:
        self._handlers = {
            event_type: handler_cls(http, factory, cache)
            for event_type, handler_cls in HANDLERS.items()
        }
        self._listeners: defaultdict[str, list[Listener]] = defaultdict(list)

    def _handler(self, event_type: str) -> Event:
        try:
            return self._handlers[event_type]
        except KeyError:
            raise UnsupportedOperation(f"No handler for event {event_type!r}") from None

    def on(self, event_type: str, listener: Listener) -> None:
        """Register a listener called with each resolved result.

        Listeners may be plain functions or coroutine functions.
        """
        self._handler(event_type)
        self._listeners[event_type].append(listener)

    async def dispatch(self, event_type: str, data: dict[str, Any]) -> Any:
        """Apply one event and return what its handler resolved.

        Raises:
            UnsupportedOperation: If the event type has no handler.
        """
        handler = self._handler(event_type)
        deferred = await handler.run(data)
        result = await deferred

        for listener in self._listeners.get(event_type, []):
            outcome = listener(result)
            if inspect.isawaitable(outcome):
                await outcome
        return result
