"""Notifications — webhook bodies and fire-and-forget delivery.

Provides:
- ``GovernanceWebhookClient`` — maps node events to webhook notifications
- ``WebhookDispatcher`` — schedules detached HTTP deliveries
- ``WebhookConfig`` — frozen webhook configuration
"""

from __future__ import annotations

from bllvm_governance.notifications.builder import (
    build_block_notification,
    build_governance_notification,
)
from bllvm_governance.notifications.delivery import WebhookDispatcher
from bllvm_governance.notifications.webhook import GovernanceWebhookClient, WebhookConfig

__all__ = [
    "GovernanceWebhookClient",
    "WebhookConfig",
    "WebhookDispatcher",
    "build_block_notification",
    "build_governance_notification",
]
