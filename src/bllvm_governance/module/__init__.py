"""Module — the event dispatch loop and its runner."""

from __future__ import annotations

from bllvm_governance.module.dispatcher import EventDispatcher
from bllvm_governance.module.runner import GOVERNANCE_EVENT_TYPES, configure_logging, run_module

__all__ = ["GOVERNANCE_EVENT_TYPES", "EventDispatcher", "configure_logging", "run_module"]
