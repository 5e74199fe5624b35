"""Error types for the donation alert service."""

from donation_alerts.errors.alert_errors import AlertError, WebhookError

__all__ = ["AlertError", "WebhookError"]
