"""Event types for the notification system.

- ``Donation`` — the canonical record produced by normalization
- ``RawEvent`` — envelope with type string + JSON content
- ``DonationEvent`` — envelope carrying a donation to overlays
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from typing import Any

DONATION_EVENT_TYPE = "donation"

# Defaults applied to synthetic donations injected via /test-donation
TEST_AMOUNT = 10.00
TEST_CURRENCY = "USD"
TEST_DONOR_NAME = "Test Donor"
TEST_MESSAGE = "This is a test donation!"


def utc_timestamp(now: datetime | None = None) -> str:
    """Return an ISO-8601 UTC instant with millisecond precision and ``Z`` suffix."""
    moment = (now or datetime.now(UTC)).astimezone(UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Donation:
    """A normalized donation as shown by the overlay.

    ``amount`` is in major currency units (e.g. dollars).
    """

    amount: float
    currency: str
    donor_name: str = "Anonymous"
    message: str = ""
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys the overlay expects."""
        return {
            "amount": self.amount,
            "currency": self.currency,
            "donorName": self.donor_name,
            "message": self.message,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class RawEvent:
    """Generic event envelope sent to subscribers."""

    type: str
    content: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict."""
        return asdict(self)


@dataclass(frozen=True)
class DonationEvent(RawEvent):
    """Envelope emitted for every broadcast donation."""

    type: str = DONATION_EVENT_TYPE

    @classmethod
    def from_donation(cls, donation: Donation) -> DonationEvent:
        return cls(content=donation.to_dict())


def build_test_donation(
    amount: float | None = None,
    currency: str | None = None,
    donor_name: str | None = None,
    message: str | None = None,
) -> Donation:
    """Build a synthetic donation, filling missing or empty fields with demo values.

    Supplied values are used verbatim: the amount is not scaled and the
    currency is not upper-cased.
    """
    return Donation(
        amount=amount or TEST_AMOUNT,
        currency=currency or TEST_CURRENCY,
        donor_name=donor_name or TEST_DONOR_NAME,
        message=message or TEST_MESSAGE,
    )
