"""Event normalization — payment events to :class:`Donation` records.

Donor name precedence for checkout sessions (first non-empty wins):

1. custom field ``name``
2. ``metadata["donor_name"]``
3. ``customer_details.name``
4. ``"Anonymous"``

Message precedence: custom field ``message``, then ``metadata["message"]``,
then the empty string. Payment intents only consult metadata.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from donation_alerts.notifications.events import Donation, utc_timestamp
from donation_alerts.payments.events import (
    CheckoutSessionCompletedEvent,
    PaymentIntentSucceededEvent,
)

if TYPE_CHECKING:
    from donation_alerts.payments.events import CheckoutSession, PaymentEvent, PaymentIntent

logger = logging.getLogger(__name__)

ANONYMOUS = "Anonymous"


def _first_non_empty(*candidates: str | None) -> str | None:
    for candidate in candidates:
        if candidate:
            return candidate
    return None


def _to_major_units(minor_units: int) -> float:
    return minor_units / 100


def from_checkout_session(session: CheckoutSession) -> Donation:
    """Build a donation from a completed Checkout Session."""
    logger.debug("Checkout Session %s metadata: %s", session.id, session.metadata)
    logger.debug("Checkout Session %s customer details: %s", session.id, session.customer_details)
    logger.debug("Checkout Session %s custom fields: %s", session.id, session.custom_fields)

    customer_name = session.customer_details.name if session.customer_details else None
    donor_name = _first_non_empty(
        session.custom_field_text("name"),
        session.metadata.get("donor_name"),
        customer_name,
    )
    message = _first_non_empty(
        session.custom_field_text("message"),
        session.metadata.get("message"),
    )
    return Donation(
        amount=_to_major_units(session.amount_total),
        currency=session.currency.upper(),
        donor_name=donor_name or ANONYMOUS,
        message=message or "",
        timestamp=utc_timestamp(),
    )


def from_payment_intent(payment_intent: PaymentIntent) -> Donation:
    """Build a donation from a succeeded PaymentIntent (metadata only)."""
    logger.debug("Payment Intent %s metadata: %s", payment_intent.id, payment_intent.metadata)
    logger.debug(
        "Payment Intent %s receipt_email: %s", payment_intent.id, payment_intent.receipt_email
    )

    return Donation(
        amount=_to_major_units(payment_intent.amount),
        currency=payment_intent.currency.upper(),
        donor_name=payment_intent.metadata.get("donor_name") or ANONYMOUS,
        message=payment_intent.metadata.get("message") or "",
        timestamp=utc_timestamp(),
    )


def normalize_event(event: PaymentEvent | None) -> Donation | None:
    """Normalize a shaped payment event; unrecognized events yield ``None``."""
    if isinstance(event, CheckoutSessionCompletedEvent):
        donation = from_checkout_session(event.data.session)
    elif isinstance(event, PaymentIntentSucceededEvent):
        donation = from_payment_intent(event.data.payment_intent)
    else:
        return None
    logger.info("New donation received: %s", donation.to_dict())
    return donation
