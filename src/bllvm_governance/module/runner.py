"""Module runner — wires settings, the webhook client and the dispatch loop."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bllvm_governance.errors.governance_errors import GovernanceError, ModuleError
from bllvm_governance.events.models import EventType
from bllvm_governance.module.dispatcher import EventDispatcher
from bllvm_governance.notifications.webhook import GovernanceWebhookClient

if TYPE_CHECKING:
    from bllvm_governance.chain.node_api import NodeAPI
    from bllvm_governance.config.settings import ModuleSettings
    from bllvm_governance.events.observer import EventObserver
    from bllvm_governance.events.source import EventSource
    from bllvm_governance.metrics.collector import GovernanceMetrics

logger = logging.getLogger(__name__)

GOVERNANCE_EVENT_TYPES: tuple[EventType, ...] = (
    EventType.GOVERNANCE_PROPOSAL_CREATED,
    EventType.GOVERNANCE_PROPOSAL_VOTED,
    EventType.GOVERNANCE_PROPOSAL_MERGED,
    EventType.ECONOMIC_NODE_REGISTERED,
    EventType.ECONOMIC_NODE_VETO,
    EventType.NEW_BLOCK,
)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(*, debug: bool = False) -> None:
    """Configure root logging for the module process."""
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format=_LOG_FORMAT)


async def run_module(
    source: EventSource,
    node_api: NodeAPI,
    *,
    settings: ModuleSettings,
    registry: EventObserver | None = None,
    metrics: GovernanceMetrics | None = None,
    webhook_client: GovernanceWebhookClient | None = None,
) -> int:
    """Subscribe to governance events and process them until the source closes.

    Args:
        source: Connected event source.
        node_api: Query interface onto the node.
        settings: Loaded module settings.
        registry: Economic node registry, invoked after the webhook client.
        metrics: Optional metrics sink.
        webhook_client: Pre-built client; created from *settings* if omitted.

    Returns:
        The number of messages processed.

    Raises:
        ModuleError: If subscribing to the event source fails.
    """
    logger.info(
        "bllvm-governance module starting... (module_id: %s, socket: %s)",
        settings.module_id,
        settings.socket_path,
    )

    try:
        await source.subscribe(GOVERNANCE_EVENT_TYPES)
    except (GovernanceError, OSError, RuntimeError) as exc:
        logger.error("Failed to subscribe to events: %s", exc)
        raise ModuleError(f"Subscription failed: {exc}") from exc

    client = webhook_client or GovernanceWebhookClient.from_settings(settings, metrics=metrics)
    observers: list[EventObserver] = [client]
    if registry is not None:
        observers.append(registry)

    dispatcher = EventDispatcher(source, node_api, observers, metrics=metrics)
    logger.info("Governance module initialized and running")
    try:
        return await dispatcher.run()
    finally:
        await client.aclose()
