"""Shared test fixtures for the donation-alerts test suite."""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from typing import Any

import pytest

WEBHOOK_SECRET = "whsec_test_secret"  # noqa: S105


def _sign(payload: str, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    """Build a ``Stripe-Signature`` header value for *payload*."""
    ts = int(time.time()) if timestamp is None else timestamp
    digest = hmac.new(secret.encode(), f"{ts}.{payload}".encode(), hashlib.sha256).hexdigest()
    return f"t={ts},v1={digest}"


@pytest.fixture
def webhook_secret() -> str:
    """Provide the webhook signing secret used by the test app."""
    return WEBHOOK_SECRET


@pytest.fixture
def sign():
    """Provide the Stripe signature helper."""
    return _sign


@pytest.fixture
def app_config():
    """Provide a test AppConfig with a known webhook secret."""
    from donation_alerts.config.settings import AppConfig, StripeConfig

    return AppConfig(
        debug=True,
        stripe=StripeConfig(secret_key="sk_test_dummy", webhook_secret=WEBHOOK_SECRET),
    )


@pytest.fixture
def app(app_config):
    """Provide a fresh application with its own hub."""
    from donation_alerts.api.app import create_app

    return create_app(config=app_config)


@pytest.fixture
def test_client(app):
    """Provide a FastAPI TestClient with the app wired to test config."""
    from fastapi.testclient import TestClient

    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def post_webhook(test_client, sign):
    """POST a signed Stripe event to ``/webhook``."""

    def _post(event: dict[str, Any], *, signature: str | None = None):
        body = json.dumps(event)
        headers = {"Content-Type": "application/json"}
        headers["Stripe-Signature"] = signature if signature is not None else sign(body)
        return test_client.post("/webhook", content=body, headers=headers)

    return _post


@pytest.fixture
def checkout_event():
    """Factory for ``checkout.session.completed`` payloads."""

    def _build(
        *,
        amount_total: int = 2599,
        currency: str = "usd",
        custom_fields: list[dict[str, Any]] | None = None,
        metadata: dict[str, str] | None = None,
        customer_name: str | None = None,
    ) -> dict[str, Any]:
        return {
            "id": "evt_checkout",
            "object": "event",
            "type": "checkout.session.completed",
            "data": {
                "object": {
                    "id": "cs_test_123",
                    "object": "checkout.session",
                    "amount_total": amount_total,
                    "currency": currency,
                    "customer_details": {"name": customer_name, "email": "donor@example.com"},
                    "metadata": metadata or {},
                    "custom_fields": custom_fields or [],
                    "payment_status": "paid",
                }
            },
        }

    return _build


@pytest.fixture
def payment_intent_event():
    """Factory for ``payment_intent.succeeded`` payloads."""

    def _build(
        *,
        amount: int = 2599,
        currency: str = "usd",
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        return {
            "id": "evt_pi",
            "object": "event",
            "type": "payment_intent.succeeded",
            "data": {
                "object": {
                    "id": "pi_test_123",
                    "object": "payment_intent",
                    "amount": amount,
                    "currency": currency,
                    "metadata": metadata or {},
                    "receipt_email": "donor@example.com",
                }
            },
        }

    return _build


def text_field(key: str, value: str | None) -> dict[str, Any]:
    """A Checkout custom field entry of type ``text``."""
    return {"key": key, "type": "text", "label": {"custom": key}, "text": {"value": value}}


@pytest.fixture
def custom_field():
    """Provide the custom field builder."""
    return text_field
