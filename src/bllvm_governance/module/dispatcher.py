"""Event dispatch loop — feeds node messages to every observer in turn.

Messages are processed one at a time in source order. A failing observer
is logged and skipped; it never stops the loop or the other observers.
The loop ends when the source is closed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bllvm_governance.events.models import EventMessage, EventType

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bllvm_governance.chain.node_api import NodeAPI
    from bllvm_governance.events.models import ModuleMessage
    from bllvm_governance.events.observer import EventObserver
    from bllvm_governance.events.source import EventSource
    from bllvm_governance.metrics.collector import GovernanceMetrics

logger = logging.getLogger(__name__)

_EVENT_LOG_LEVELS: dict[EventType, tuple[int, str]] = {
    EventType.GOVERNANCE_PROPOSAL_CREATED: (
        logging.INFO,
        "Governance proposal created event received",
    ),
    EventType.GOVERNANCE_PROPOSAL_VOTED: (
        logging.INFO,
        "Governance proposal voted event received",
    ),
    EventType.GOVERNANCE_PROPOSAL_MERGED: (
        logging.INFO,
        "Governance proposal merged event received",
    ),
    EventType.ECONOMIC_NODE_REGISTERED: (
        logging.INFO,
        "Economic node registered event received",
    ),
    EventType.ECONOMIC_NODE_VETO: (
        logging.WARNING,
        "Economic node veto event received",
    ),
    EventType.NEW_BLOCK: (
        logging.DEBUG,
        "New block event received (tracking for governance)",
    ),
}


class EventDispatcher:
    """Sequential consumer of an :class:`EventSource`.

    Usage::

        dispatcher = EventDispatcher(source, node_api, [webhook_client, registry])
        processed = await dispatcher.run()
    """

    def __init__(
        self,
        source: EventSource,
        node_api: NodeAPI,
        observers: Sequence[EventObserver],
        *,
        metrics: GovernanceMetrics | None = None,
    ) -> None:
        self._source = source
        self._node_api = node_api
        self._observers = tuple(observers)
        self._metrics = metrics

    @property
    def observers(self) -> tuple[EventObserver, ...]:
        """Observers in the order they are invoked."""
        return self._observers

    async def run(self) -> int:
        """Consume messages until the source closes.

        Returns:
            The number of messages processed.
        """
        processed = 0
        while True:
            message = await self._source.receive()
            if message is None:
                break
            await self.dispatch(message)
            processed += 1
        logger.warning("Event receiver closed, module shutting down")
        return processed

    async def dispatch(self, message: ModuleMessage) -> None:
        """Hand one message to every observer, then log it."""
        if self._metrics is not None and isinstance(message, EventMessage):
            self._metrics.record_event(message.event_type)

        for observer in self._observers:
            try:
                await observer.handle_event(message, self._node_api)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Error handling event in %s: %s", observer.name, exc)
                if self._metrics is not None:
                    self._metrics.record_handler_error(observer.name)

        _log_event(message)


def _log_event(message: ModuleMessage) -> None:
    if not isinstance(message, EventMessage):
        return
    entry = _EVENT_LOG_LEVELS.get(message.event_type)
    if entry is not None:
        level, text = entry
        logger.log(level, text)
