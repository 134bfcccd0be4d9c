"""Event sources — where the dispatch loop reads node events from."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from bllvm_governance.events.models import EventMessage

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bllvm_governance.events.models import EventType, ModuleMessage

logger = logging.getLogger(__name__)

_CLOSED = object()


class EventSource(ABC):
    """Abstract stream of messages from the node."""

    @abstractmethod
    async def subscribe(self, event_types: Iterable[EventType]) -> None:
        """Ask the node to deliver the given event types."""

    @abstractmethod
    async def receive(self) -> ModuleMessage | None:
        """Wait for the next message. Returns ``None`` once the source is closed."""

    @abstractmethod
    async def close(self) -> None:
        """Close the source; pending and future ``receive`` calls return ``None``."""


class MemoryEventSource(EventSource):
    """In-process event source backed by an unbounded asyncio queue.

    Usage::

        source = MemoryEventSource()
        await source.subscribe([EventType.NEW_BLOCK])
        source.publish(EventMessage.of(NewBlock(block_hash=h, height=1)))
        msg = await source.receive()
        await source.close()

    Events whose type was not subscribed are dropped at ``publish`` time.
    Non-event messages are always delivered.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[ModuleMessage | object] = asyncio.Queue()
        self._subscribed: set[EventType] = set()
        self._closed = False

    @property
    def subscribed(self) -> frozenset[EventType]:
        """Event types currently subscribed."""
        return frozenset(self._subscribed)

    @property
    def is_closed(self) -> bool:
        """Whether ``close`` has been called."""
        return self._closed

    async def subscribe(self, event_types: Iterable[EventType]) -> None:
        """Add *event_types* to the subscription set."""
        if self._closed:
            msg = "event source is closed"
            raise RuntimeError(msg)
        self._subscribed.update(event_types)
        logger.debug("Subscribed to %d event types", len(self._subscribed))

    def publish(self, message: ModuleMessage) -> bool:
        """Enqueue a message. Returns ``False`` if it was dropped."""
        if self._closed:
            return False
        if isinstance(message, EventMessage) and message.event_type not in self._subscribed:
            return False
        self._queue.put_nowait(message)
        return True

    async def receive(self) -> ModuleMessage | None:
        """Wait for the next queued message."""
        item = await self._queue.get()
        if item is _CLOSED:
            # Leave the marker in place for any other waiting consumers
            self._queue.put_nowait(_CLOSED)
            return None
        return item  # type: ignore[return-value]

    async def close(self) -> None:
        """Stop the stream after already-queued messages are consumed."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)
