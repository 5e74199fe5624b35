"""Pre-defined webhook errors surfaced to the payment processor."""

from __future__ import annotations

from donation_alerts.errors.alert_errors import WebhookError

# -- Authentication --------------------------------------------------------

ErrMissingSignature = WebhookError(
    "missing Stripe-Signature header", code="missing-signature"
)
ErrInvalidSignature = WebhookError(
    "no signatures found matching the expected signature for payload",
    code="invalid-signature",
)
ErrWebhookSecretMissing = WebhookError(
    "webhook signing secret is not configured", code="webhook-secret-missing"
)

# -- Payload ---------------------------------------------------------------

ErrMalformedPayload = WebhookError("malformed event payload", code="malformed-payload")
