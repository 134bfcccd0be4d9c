"""Metrics — Prometheus metrics collection."""

from __future__ import annotations

from bllvm_governance.metrics.collector import GovernanceMetrics, MetricsCollector

__all__ = ["GovernanceMetrics", "MetricsCollector"]
