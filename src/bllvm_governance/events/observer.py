"""Event observers — components that react to node messages."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bllvm_governance.chain.node_api import NodeAPI
    from bllvm_governance.events.models import ModuleMessage


class EventObserver(ABC):
    """Abstract handler invoked by the dispatch loop for every message.

    Implemented by the webhook client and by the economic node registry.
    """

    name: str = "observer"

    @abstractmethod
    async def handle_event(self, message: ModuleMessage, node_api: NodeAPI) -> None:
        """React to *message*. Raising reports a failure for this message only."""
