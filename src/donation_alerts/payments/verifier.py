"""Stripe webhook authentication.

The signature scheme itself is delegated to ``stripe.WebhookSignature``; this
module only maps its failures onto :class:`WebhookError` and decodes the
authenticated body.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import stripe

from donation_alerts.errors.alert_errors import WebhookError
from donation_alerts.errors.definitions import (
    ErrInvalidSignature,
    ErrMalformedPayload,
    ErrMissingSignature,
    ErrWebhookSecretMissing,
)

if TYPE_CHECKING:
    from donation_alerts.config.settings import StripeConfig

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "Stripe-Signature"


class WebhookVerifier:
    """Authenticates raw webhook bodies against the endpoint signing secret."""

    def __init__(self, config: StripeConfig) -> None:
        self._secret = config.webhook_secret
        self._tolerance = config.tolerance
        if not self._secret:
            logger.warning("STRIPE_WEBHOOK_SECRET not set — all webhooks will be rejected")

    @property
    def configured(self) -> bool:
        """Whether a webhook signing secret is available."""
        return bool(self._secret)

    def verify(self, payload: bytes, signature: str | None) -> dict[str, Any]:
        """Verify *payload* against *signature* and return the decoded event.

        Raises:
            WebhookError: On a missing secret or header, a signature mismatch,
                a stale timestamp, or a body that is not a JSON object.
        """
        if not self._secret:
            raise ErrWebhookSecretMissing
        if not signature:
            raise ErrMissingSignature

        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise WebhookError("payload is not valid UTF-8", code=ErrMalformedPayload.code) from exc

        try:
            stripe.WebhookSignature.verify_header(text, signature, self._secret, self._tolerance)
        except stripe.SignatureVerificationError as exc:
            raise WebhookError(str(exc), code=ErrInvalidSignature.code) from exc

        try:
            event = json.loads(text)
        except json.JSONDecodeError as exc:
            raise WebhookError(f"invalid JSON payload: {exc.msg}", code=ErrMalformedPayload.code) from exc
        if not isinstance(event, dict):
            raise ErrMalformedPayload
        return event
