"""Metrics collector — Prometheus counters and gauges.

- ``governance_events_total`` counter-vec (event_type)
- ``governance_handler_errors_total`` counter-vec (handler)
- ``governance_webhook_deliveries_total`` counter-vec (outcome)
- ``governance_webhook_in_flight`` gauge
"""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge

_PREFIX = "governance"

# Delivery outcome label values
OUTCOME_SUCCESS = "success"
OUTCOME_ERROR_STATUS = "error_status"
OUTCOME_TRANSPORT_ERROR = "transport_error"
OUTCOME_ERROR = "error"


class MetricsCollector:
    """Low-level Prometheus collector that owns the registry.

    Use :class:`GovernanceMetrics` for the high-level tracking interface.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self._registry = registry or CollectorRegistry()

    @property
    def registry(self) -> CollectorRegistry:
        """Return the underlying Prometheus registry."""
        return self._registry

    def gauge(self, name: str, doc: str, labels: tuple[str, ...] = ()) -> Gauge:
        """Register and return a Gauge."""
        return Gauge(name, doc, labels, registry=self._registry)

    def counter(self, name: str, doc: str, labels: tuple[str, ...] = ()) -> Counter:
        """Register and return a Counter."""
        return Counter(name, doc, labels, registry=self._registry)


class GovernanceMetrics:
    """High-level metrics for event dispatch and webhook delivery."""

    def __init__(self, collector: MetricsCollector | None = None) -> None:
        self._collector = collector or MetricsCollector()

        self._events = self._collector.counter(
            f"{_PREFIX}_events_total",
            "Events received from the node",
            ("event_type",),
        )
        self._handler_errors = self._collector.counter(
            f"{_PREFIX}_handler_errors_total",
            "Errors raised by event handlers",
            ("handler",),
        )
        self._deliveries = self._collector.counter(
            f"{_PREFIX}_webhook_deliveries_total",
            "Completed webhook deliveries by outcome",
            ("outcome",),
        )
        self._in_flight = self._collector.gauge(
            f"{_PREFIX}_webhook_in_flight",
            "Webhook deliveries currently in flight",
        )

    @property
    def registry(self) -> CollectorRegistry:
        """Return the underlying Prometheus registry."""
        return self._collector.registry

    def record_event(self, event_type: str) -> None:
        """Count one received event."""
        self._events.labels(event_type=event_type).inc()

    def record_handler_error(self, handler: str) -> None:
        """Count one handler failure."""
        self._handler_errors.labels(handler=handler).inc()

    def delivery_started(self) -> None:
        """Mark a webhook delivery as in flight."""
        self._in_flight.inc()

    def delivery_finished(self, outcome: str) -> None:
        """Mark a webhook delivery as finished with *outcome*."""
        self._in_flight.dec()
        self._deliveries.labels(outcome=outcome).inc()
