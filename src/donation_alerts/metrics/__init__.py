"""Metrics — Prometheus metrics collection and exposure."""

from __future__ import annotations

from donation_alerts.metrics.collector import AlertMetrics, MetricsCollector

__all__ = ["AlertMetrics", "MetricsCollector"]
