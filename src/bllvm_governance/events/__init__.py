"""Events — node event envelopes and event sources."""

from __future__ import annotations

from bllvm_governance.events.models import (
    EconomicNodeRegistered,
    EconomicNodeVeto,
    EventMessage,
    EventPayload,
    EventType,
    GenericPayload,
    ModuleMessage,
    NewBlock,
    ProposalCreated,
    ProposalMerged,
    ProposalVoted,
)
from bllvm_governance.events.observer import EventObserver
from bllvm_governance.events.source import EventSource, MemoryEventSource

__all__ = [
    "EconomicNodeRegistered",
    "EconomicNodeVeto",
    "EventMessage",
    "EventObserver",
    "EventPayload",
    "EventSource",
    "EventType",
    "GenericPayload",
    "MemoryEventSource",
    "ModuleMessage",
    "NewBlock",
    "ProposalCreated",
    "ProposalMerged",
    "ProposalVoted",
]
