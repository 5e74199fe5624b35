"""Payments — Stripe webhook authentication, event shaping and normalization."""

from __future__ import annotations

from donation_alerts.payments.events import (
    CheckoutSessionCompletedEvent,
    PaymentEvent,
    PaymentIntentSucceededEvent,
    parse_event,
)
from donation_alerts.payments.normalizer import normalize_event
from donation_alerts.payments.verifier import WebhookVerifier

__all__ = [
    "CheckoutSessionCompletedEvent",
    "PaymentEvent",
    "PaymentIntentSucceededEvent",
    "WebhookVerifier",
    "normalize_event",
    "parse_event",
]
