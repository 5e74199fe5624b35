"""API request/response schemas (Pydantic models)."""

from __future__ import annotations

from pydantic import BaseModel, Field

from donation_alerts.notifications.events import Donation  # noqa: TC001 - used at runtime


class SyntheticDonationRequest(BaseModel):
    """Optional overrides for a synthetic donation."""

    amount: float | None = None
    currency: str | None = None
    donor_name: str | None = Field(None, alias="donorName")
    message: str | None = None

    model_config = {"populate_by_name": True}


class DonationResponse(BaseModel):
    """A donation as broadcast to overlays."""

    amount: float
    currency: str
    donor_name: str = Field(alias="donorName")
    message: str
    timestamp: str

    model_config = {"populate_by_name": True}

    @classmethod
    def from_donation(cls, donation: Donation) -> DonationResponse:
        return cls.model_validate(donation.to_dict())


class SyntheticDonationResponse(BaseModel):
    """Result of ``POST /test-donation``."""

    success: bool = True
    donation: DonationResponse


class WebhookAck(BaseModel):
    """Acknowledgement returned to Stripe for every authenticated event."""

    received: bool = True
