"""Metrics collector — Prometheus counters and gauges.

- ``donation_alerts_webhooks_total`` counter-vec (rejected, ignored, donation)
- ``donation_alerts_donations_total`` counter-vec (webhook, test)
- ``donation_alerts_subscribers`` gauge
"""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge

_PREFIX = "donation_alerts"

WEBHOOK_OUTCOMES = ("rejected", "ignored", "donation")
DONATION_SOURCES = ("webhook", "test")


class MetricsCollector:
    """Low-level Prometheus collector that owns the registry.

    Use :class:`AlertMetrics` for the high-level tracking interface.
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


class AlertMetrics:
    """High-level metrics for webhook intake and donation fan-out."""

    def __init__(self, collector: MetricsCollector | None = None) -> None:
        self._collector = collector or MetricsCollector()

        self._webhooks = self._collector.counter(
            f"{_PREFIX}_webhooks",
            "Stripe webhooks received, by outcome",
            ("outcome",),
        )
        self._donations = self._collector.counter(
            f"{_PREFIX}_donations",
            "Donations broadcast to overlays, by source",
            ("source",),
        )
        self._subscribers = self._collector.gauge(
            f"{_PREFIX}_subscribers",
            "Currently connected overlay subscribers",
        )

        # Pre-create label sets so they are exported as zero
        for outcome in WEBHOOK_OUTCOMES:
            self._webhooks.labels(outcome=outcome)
        for source in DONATION_SOURCES:
            self._donations.labels(source=source)

    @property
    def registry(self) -> CollectorRegistry:
        """Return the underlying Prometheus registry."""
        return self._collector.registry

    def record_webhook(self, outcome: str) -> None:
        """Count a webhook by outcome."""
        self._webhooks.labels(outcome=outcome).inc()

    def record_donation(self, source: str) -> None:
        """Count a broadcast donation by source."""
        self._donations.labels(source=source).inc()

    def set_subscriber_count(self, count: int) -> None:
        """Set the number of connected subscribers."""
        self._subscribers.set(count)
