"""Synthetic donations for testing overlays without a real payment."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from donation_alerts.api.dependencies import get_hub, get_metrics
from donation_alerts.api.schemas import (
    DonationResponse,
    SyntheticDonationRequest,
    SyntheticDonationResponse,
)
from donation_alerts.metrics.collector import AlertMetrics  # noqa: TC001
from donation_alerts.notifications.events import build_test_donation
from donation_alerts.notifications.hub import BroadcastHub  # noqa: TC001

logger = logging.getLogger(__name__)

router = APIRouter(tags=["donations"])


@router.post("/test-donation", response_model=SyntheticDonationResponse)
async def trigger_test_donation(
    hub: Annotated[BroadcastHub, Depends(get_hub)],
    metrics: Annotated[AlertMetrics, Depends(get_metrics)],
    body: SyntheticDonationRequest | None = None,
) -> SyntheticDonationResponse:
    """Broadcast a donation built from the request, bypassing Stripe."""
    body = body or SyntheticDonationRequest()
    donation = build_test_donation(
        amount=body.amount,
        currency=body.currency,
        donor_name=body.donor_name,
        message=body.message,
    )
    logger.info("Test donation triggered: %s", donation.to_dict())
    hub.broadcast(donation)
    metrics.record_donation("test")
    return SyntheticDonationResponse(donation=DonationResponse.from_donation(donation))
