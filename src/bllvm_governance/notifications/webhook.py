"""Governance webhook client — turns node events into webhook notifications.

Proposal events are forwarded with their own fields. New blocks are
looked up through the node API, hashed and forwarded in full; a block the
node no longer has is silently skipped. Delivery is fire-and-forget via
:class:`WebhookDispatcher`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Self

import httpx

from bllvm_governance.chain.header import block_header_hash
from bllvm_governance.errors.governance_errors import WebhookError
from bllvm_governance.events.models import (
    EventMessage,
    NewBlock,
    ProposalCreated,
    ProposalMerged,
    ProposalVoted,
)
from bllvm_governance.events.observer import EventObserver
from bllvm_governance.notifications.builder import (
    build_block_notification,
    build_governance_notification,
    governance_event_data,
)
from bllvm_governance.notifications.delivery import WebhookDispatcher

if TYPE_CHECKING:
    from bllvm_governance.chain.models import Block
    from bllvm_governance.chain.node_api import NodeAPI
    from bllvm_governance.config.settings import ModuleSettings
    from bllvm_governance.events.models import ModuleMessage
    from bllvm_governance.metrics.collector import GovernanceMetrics

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class WebhookConfig:
    """Immutable webhook configuration.

    Attributes:
        url: Destination; ``None`` disables all network activity.
        node_id: Identity attached to every notification.
        timeout: HTTP timeout in seconds.
    """

    url: str | None = None
    node_id: str | None = None
    timeout: float = DEFAULT_TIMEOUT

    @property
    def enabled(self) -> bool:
        """Whether notifications are sent at all."""
        return self.url is not None

    @classmethod
    def from_settings(cls, settings: ModuleSettings) -> Self:
        """Build from loaded module settings."""
        gov = settings.governance
        return cls(url=gov.webhook_url, node_id=gov.node_id, timeout=gov.webhook_timeout)


class GovernanceWebhookClient(EventObserver):
    """Sends governance and block notifications to the configured webhook."""

    name = "webhook client"

    def __init__(
        self,
        config: WebhookConfig,
        *,
        client: httpx.AsyncClient | None = None,
        metrics: GovernanceMetrics | None = None,
    ) -> None:
        self._config = config
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=config.timeout)
        self._dispatcher = WebhookDispatcher(self._client, metrics=metrics)

        if config.enabled:
            logger.info("Governance webhook client initialized: %s", config.url)
        else:
            logger.debug("Governance webhook client disabled (no URL configured)")

    @classmethod
    def from_settings(
        cls,
        settings: ModuleSettings,
        *,
        metrics: GovernanceMetrics | None = None,
    ) -> Self:
        """Create a client from module settings."""
        return cls(WebhookConfig.from_settings(settings), metrics=metrics)

    @property
    def config(self) -> WebhookConfig:
        """The client's (immutable) configuration."""
        return self._config

    @property
    def enabled(self) -> bool:
        """Whether notifications are sent."""
        return self._config.enabled

    @property
    def dispatcher(self) -> WebhookDispatcher:
        """The dispatcher running this client's deliveries."""
        return self._dispatcher

    # ------------------------------------------------------------------
    # Event handling
    # ------------------------------------------------------------------

    async def handle_event(self, message: ModuleMessage, node_api: NodeAPI) -> None:
        """Handle a message from the node.

        Returns as soon as any delivery has been scheduled; never waits on
        the webhook itself.

        Raises:
            WebhookError: If a block record cannot be serialized.
        """
        if not self._config.enabled:
            return
        if not isinstance(message, EventMessage):
            return

        payload = message.payload
        if isinstance(payload, NewBlock):
            block = await self._fetch_block(payload.block_hash, node_api)
            if block is not None:
                self._notify_block(block, payload.height)
        elif isinstance(payload, ProposalCreated):
            logger.info(
                "Governance proposal created: id=%s, tier=%s, author=%s, height=%d",
                payload.proposal_id,
                payload.tier,
                payload.author,
                payload.block_height,
            )
            self._notify_governance_event(payload)
        elif isinstance(payload, ProposalVoted):
            logger.info(
                "Governance proposal voted: id=%s, voter=%s, vote=%s, height=%d",
                payload.proposal_id,
                payload.voter,
                payload.vote,
                payload.block_height,
            )
            self._notify_governance_event(payload)
        elif isinstance(payload, ProposalMerged):
            logger.info(
                "Governance proposal merged: id=%s, merged_at=%d, height=%d",
                payload.proposal_id,
                payload.merged_at,
                payload.block_height,
            )
            self._notify_governance_event(payload)
        # All other events are ignored

    async def _fetch_block(self, block_hash: bytes, node_api: NodeAPI) -> Block | None:
        """Query the node for a block; failures count as "no block"."""
        try:
            block = await node_api.get_block(block_hash)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Block %s lookup failed, skipping notification: %s", block_hash.hex(), exc)
            return None
        if block is None:
            logger.debug("Block %s not available, skipping notification", block_hash.hex())
        return block

    def _notify_governance_event(
        self, payload: ProposalCreated | ProposalVoted | ProposalMerged
    ) -> None:
        event_type, data = governance_event_data(payload)  # type: ignore[misc]
        body = build_governance_notification(event_type, data, self._config.node_id)
        self._dispatch(body, f"event_type={event_type}")

    def _notify_block(self, block: Block, height: int) -> None:
        try:
            block_hash = block_header_hash(block.header)
            body = build_block_notification(block_hash, height, block, self._config.node_id)
            # Fail here rather than inside the detached delivery task
            json.dumps(body)
        except (TypeError, ValueError) as exc:
            raise WebhookError(f"Failed to serialize block at height {height}: {exc}") from exc
        self._dispatch(body, f"block {block_hash.hex()} at height {height}")

    def _dispatch(self, body: dict[str, Any], description: str) -> None:
        # Only reached once handle_event has checked that a URL is configured
        self._dispatcher.dispatch(self._config.url, body, description)  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def drain(self) -> None:
        """Wait for all in-flight deliveries to finish."""
        await self._dispatcher.drain()

    async def aclose(self) -> None:
        """Drain pending deliveries and close the HTTP client if owned."""
        await self.drain()
        if self._owns_client:
            await self._client.aclose()
