"""Notification bodies — the JSON documents POSTed to the webhook.

Two shapes are produced:

Governance events::

    {"event_type": "proposal_created", "data": {...},
     "node_id": "node-1" | None, "timestamp": 1700000000}

Blocks::

    {"block_hash": "<hex>", "block_height": 100, "block": {...},
     "contributor_id": "node-1" | None}
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from bllvm_governance.events.models import ProposalCreated, ProposalMerged, ProposalVoted

if TYPE_CHECKING:
    from bllvm_governance.chain.models import Block
    from bllvm_governance.events.models import EventPayload

PROPOSAL_CREATED = "proposal_created"
PROPOSAL_VOTED = "proposal_voted"
PROPOSAL_MERGED = "proposal_merged"


def governance_event_data(payload: EventPayload) -> tuple[str, dict[str, Any]] | None:
    """Return ``(event_type, data)`` for a governance payload, else ``None``."""
    if isinstance(payload, ProposalCreated):
        return PROPOSAL_CREATED, {
            "proposal_id": payload.proposal_id,
            "tier": payload.tier,
            "author": payload.author,
            "block_height": payload.block_height,
        }
    if isinstance(payload, ProposalVoted):
        return PROPOSAL_VOTED, {
            "proposal_id": payload.proposal_id,
            "voter": payload.voter,
            "vote": payload.vote,
            "block_height": payload.block_height,
        }
    if isinstance(payload, ProposalMerged):
        return PROPOSAL_MERGED, {
            "proposal_id": payload.proposal_id,
            "merged_at": payload.merged_at,
            "block_height": payload.block_height,
        }
    return None


def build_governance_notification(
    event_type: str,
    data: dict[str, Any],
    node_id: str | None,
    *,
    timestamp: int | None = None,
) -> dict[str, Any]:
    """Build the body for a governance event notification."""
    return {
        "event_type": event_type,
        "data": data,
        "node_id": node_id,
        "timestamp": int(time.time()) if timestamp is None else timestamp,
    }


def build_block_notification(
    block_hash: bytes,
    height: int,
    block: Block,
    contributor_id: str | None,
) -> dict[str, Any]:
    """Build the body for a new block notification."""
    return {
        "block_hash": block_hash.hex(),
        "block_height": height,
        "block": block.to_dict(),
        "contributor_id": contributor_id,
    }
