"""Event types for messages received from the node.

- ``ModuleMessage`` — anything the node sends to a module
- ``EventMessage`` — envelope carrying an ``EventType`` and a typed payload
- ``EventPayload`` subclasses — one per event variant this module understands;
  ``GenericPayload`` carries every other variant untouched
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, ClassVar


class EventType(enum.StrEnum):
    """Event types published by the node."""

    NEW_BLOCK = "new_block"
    BLOCK_DISCONNECTED = "block_disconnected"
    NEW_TRANSACTION = "new_transaction"
    GOVERNANCE_PROPOSAL_CREATED = "governance_proposal_created"
    GOVERNANCE_PROPOSAL_VOTED = "governance_proposal_voted"
    GOVERNANCE_PROPOSAL_MERGED = "governance_proposal_merged"
    ECONOMIC_NODE_REGISTERED = "economic_node_registered"
    ECONOMIC_NODE_VETO = "economic_node_veto"


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EventPayload:
    """Base class for event payloads."""

    event_type: ClassVar[EventType | None] = None


@dataclass(frozen=True)
class ProposalCreated(EventPayload):
    """A governance proposal was created."""

    event_type: ClassVar[EventType] = EventType.GOVERNANCE_PROPOSAL_CREATED

    proposal_id: str
    tier: str
    author: str
    block_height: int


@dataclass(frozen=True)
class ProposalVoted(EventPayload):
    """A vote was cast on a governance proposal."""

    event_type: ClassVar[EventType] = EventType.GOVERNANCE_PROPOSAL_VOTED

    proposal_id: str
    voter: str
    vote: str
    block_height: int


@dataclass(frozen=True)
class ProposalMerged(EventPayload):
    """A governance proposal was merged."""

    event_type: ClassVar[EventType] = EventType.GOVERNANCE_PROPOSAL_MERGED

    proposal_id: str
    merged_at: int
    block_height: int


@dataclass(frozen=True)
class NewBlock(EventPayload):
    """A new block was connected to the node's chain."""

    event_type: ClassVar[EventType] = EventType.NEW_BLOCK

    block_hash: bytes
    height: int


@dataclass(frozen=True)
class EconomicNodeRegistered(EventPayload):
    """An economic node registered with the network."""

    event_type: ClassVar[EventType] = EventType.ECONOMIC_NODE_REGISTERED

    node_id: str
    node_type: str
    hashpower_percent: float | None = None


@dataclass(frozen=True)
class EconomicNodeVeto(EventPayload):
    """An economic node vetoed a governance proposal."""

    event_type: ClassVar[EventType] = EventType.ECONOMIC_NODE_VETO

    proposal_id: str
    node_id: str
    reason: str = ""


@dataclass(frozen=True)
class GenericPayload(EventPayload):
    """Payload of an event variant this module does not interpret."""

    data: dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ModuleMessage:
    """Base class for messages delivered from the node to a module."""


@dataclass(frozen=True)
class EventMessage(ModuleMessage):
    """An event envelope: type tag plus payload."""

    event_type: EventType
    payload: EventPayload

    @classmethod
    def of(cls, payload: EventPayload) -> EventMessage:
        """Wrap a typed payload, taking the type tag from the payload class."""
        if payload.event_type is None:
            msg = f"{type(payload).__name__} has no fixed event type"
            raise ValueError(msg)
        return cls(event_type=payload.event_type, payload=payload)
