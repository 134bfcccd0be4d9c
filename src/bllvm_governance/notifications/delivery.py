"""Webhook delivery — fire-and-forget HTTP POSTs.

Each delivery runs as its own asyncio task. The caller never awaits it;
the outcome is only visible in logs and metrics. There is no retry and
no limit on the number of deliveries in flight.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import httpx

from bllvm_governance.metrics.collector import (
    OUTCOME_ERROR,
    OUTCOME_ERROR_STATUS,
    OUTCOME_SUCCESS,
    OUTCOME_TRANSPORT_ERROR,
)

if TYPE_CHECKING:
    from bllvm_governance.metrics.collector import GovernanceMetrics

logger = logging.getLogger(__name__)


class WebhookDispatcher:
    """Schedules detached webhook deliveries on a shared HTTP client.

    Usage::

        dispatcher = WebhookDispatcher(httpx.AsyncClient(timeout=10.0))
        dispatcher.dispatch(url, {"event_type": "..."}, "event_type=proposal_created")
        ...
        await dispatcher.drain()  # only at shutdown
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        metrics: GovernanceMetrics | None = None,
    ) -> None:
        self._client = client
        self._metrics = metrics
        # Strong references so running tasks are not garbage-collected
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def in_flight(self) -> int:
        """Number of deliveries not yet finished."""
        return len(self._tasks)

    def dispatch(self, url: str, payload: dict[str, Any], description: str) -> asyncio.Task[None]:
        """Schedule a POST of *payload* to *url* and return immediately.

        Args:
            url: Webhook destination.
            payload: JSON-serializable notification body (owned by the task).
            description: Identifies the event in log lines.
        """
        if self._metrics is not None:
            self._metrics.delivery_started()
        task = asyncio.create_task(self._deliver(url, payload, description))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for every in-flight delivery to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _deliver(self, url: str, payload: dict[str, Any], description: str) -> None:
        outcome = OUTCOME_TRANSPORT_ERROR
        try:
            response = await self._client.post(url, json=payload)
            if response.is_success:
                outcome = OUTCOME_SUCCESS
                logger.debug("Governance webhook sent successfully: %s", description)
            else:
                outcome = OUTCOME_ERROR_STATUS
                logger.warning(
                    "Governance webhook returned error status %d for %s",
                    response.status_code,
                    description,
                )
        except httpx.HTTPError as exc:
            logger.warning("Failed to send governance webhook for %s: %s", description, exc)
        except Exception as exc:  # noqa: BLE001
            outcome = OUTCOME_ERROR
            logger.warning(
                "Unexpected error sending governance webhook for %s: %r", description, exc
            )
        finally:
            if self._metrics is not None:
                self._metrics.delivery_finished(outcome)
