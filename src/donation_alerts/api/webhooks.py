"""Stripe webhook receiver.

Called directly by Stripe. The signature header is the only authentication;
anything that fails verification is rejected with 400 so Stripe's own retry
policy decides about redelivery.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request

from donation_alerts.api.dependencies import get_hub, get_metrics, get_verifier
from donation_alerts.api.schemas import WebhookAck
from donation_alerts.errors.alert_errors import WebhookError
from donation_alerts.metrics.collector import AlertMetrics  # noqa: TC001
from donation_alerts.notifications.hub import BroadcastHub  # noqa: TC001
from donation_alerts.payments.events import parse_event
from donation_alerts.payments.normalizer import normalize_event
from donation_alerts.payments.verifier import SIGNATURE_HEADER, WebhookVerifier  # noqa: TC001

logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhooks"])


@router.post("/webhook", response_model=WebhookAck)
async def stripe_webhook(
    request: Request,
    hub: Annotated[BroadcastHub, Depends(get_hub)],
    verifier: Annotated[WebhookVerifier, Depends(get_verifier)],
    metrics: Annotated[AlertMetrics, Depends(get_metrics)],
    stripe_signature: Annotated[str | None, Header(alias=SIGNATURE_HEADER)] = None,
) -> WebhookAck:
    """Authenticate a Stripe event and broadcast the donation it describes.

    Authenticated events are always acknowledged, including event types that
    do not produce a donation.
    """
    payload = await request.body()
    try:
        raw_event = verifier.verify(payload, stripe_signature)
        event = parse_event(raw_event)
    except WebhookError as exc:
        logger.warning("Webhook rejected (%s): %s", exc.code, exc.message)
        metrics.record_webhook("rejected")
        raise

    donation = normalize_event(event)
    if donation is None:
        logger.debug("Ignoring Stripe event %s of type %s", raw_event.get("id"), raw_event.get("type"))
        metrics.record_webhook("ignored")
    else:
        hub.broadcast(donation)
        metrics.record_webhook("donation")
        metrics.record_donation("webhook")
    return WebhookAck()
