"""Stripe event payloads shaped into typed models.

Only the two event types that carry a completed payment are modelled:

- ``checkout.session.completed`` → :class:`CheckoutSessionCompletedEvent`
- ``payment_intent.succeeded`` → :class:`PaymentIntentSucceededEvent`

Every other event type is unrecognized and :func:`parse_event` returns
``None`` for it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from donation_alerts.errors.alert_errors import WebhookError
from donation_alerts.errors.definitions import ErrMalformedPayload

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"
PAYMENT_INTENT_SUCCEEDED = "payment_intent.succeeded"

RECOGNIZED_EVENT_TYPES = frozenset({CHECKOUT_SESSION_COMPLETED, PAYMENT_INTENT_SUCCEEDED})

# Amounts in minor units; the ceiling keeps the major-unit float exact.
MinorUnits = Annotated[int, Field(ge=0, le=2**53)]


# ---------------------------------------------------------------------------
# Checkout session
# ---------------------------------------------------------------------------


class CustomFieldText(BaseModel):
    """Text answer of a checkout custom field."""

    value: str | None = None


class CustomField(BaseModel):
    """A custom field collected on the Checkout page."""

    key: str
    type: str = "text"
    text: CustomFieldText | None = None


class CustomerDetails(BaseModel):
    """Billing details entered by the customer."""

    name: str | None = None
    email: str | None = None


class CheckoutSession(BaseModel):
    """The subset of a Stripe Checkout Session used for donations."""

    id: str = ""
    amount_total: MinorUnits
    currency: str
    customer_details: CustomerDetails | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    custom_fields: list[CustomField] = Field(default_factory=list)

    @field_validator("metadata", mode="before")
    @classmethod
    def _empty_metadata(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("custom_fields", mode="before")
    @classmethod
    def _empty_custom_fields(cls, value: Any) -> Any:
        return [] if value is None else value

    def custom_field_text(self, key: str) -> str | None:
        """Return the text value of the first custom field with *key*."""
        for custom_field in self.custom_fields:
            if custom_field.key == key:
                return custom_field.text.value if custom_field.text else None
        return None


class _CheckoutSessionData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session: CheckoutSession = Field(alias="object")


class CheckoutSessionCompletedEvent(BaseModel):
    """``checkout.session.completed`` event."""

    id: str = ""
    type: Literal["checkout.session.completed"]
    data: _CheckoutSessionData


# ---------------------------------------------------------------------------
# Payment intent
# ---------------------------------------------------------------------------


class PaymentIntent(BaseModel):
    """The subset of a Stripe PaymentIntent used for donations."""

    id: str = ""
    amount: MinorUnits
    currency: str
    metadata: dict[str, str] = Field(default_factory=dict)
    receipt_email: str | None = None

    @field_validator("metadata", mode="before")
    @classmethod
    def _empty_metadata(cls, value: Any) -> Any:
        return {} if value is None else value


class _PaymentIntentData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    payment_intent: PaymentIntent = Field(alias="object")


class PaymentIntentSucceededEvent(BaseModel):
    """``payment_intent.succeeded`` event."""

    id: str = ""
    type: Literal["payment_intent.succeeded"]
    data: _PaymentIntentData


# ---------------------------------------------------------------------------
# Tagged union
# ---------------------------------------------------------------------------

PaymentEvent = Annotated[
    CheckoutSessionCompletedEvent | PaymentIntentSucceededEvent,
    Field(discriminator="type"),
]

_EVENT_ADAPTER: TypeAdapter[PaymentEvent] = TypeAdapter(PaymentEvent)


def parse_event(payload: Mapping[str, Any]) -> PaymentEvent | None:
    """Shape a verified Stripe event payload.

    Returns ``None`` for event types that do not describe a payment.

    Raises:
        WebhookError: If the event type is not a string, or a recognized
            event does not match its schema.
    """
    event_type = payload.get("type")
    if event_type is not None and not isinstance(event_type, str):
        raise ErrMalformedPayload
    if event_type not in RECOGNIZED_EVENT_TYPES:
        return None
    try:
        return _EVENT_ADAPTER.validate_python(dict(payload))
    except ValidationError as exc:
        raise WebhookError(
            f"malformed {event_type} payload ({exc.error_count()} validation error(s))",
            code="malformed-payload",
        ) from exc
