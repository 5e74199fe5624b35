"""Notifications — donation records and real-time fan-out.

Provides:
- ``Donation`` — canonical donation record pushed to overlays
- ``RawEvent`` / ``DonationEvent`` — wire envelopes sent to subscribers
- ``BroadcastHub`` — registry of connected subscribers with synchronous fan-out
- ``Subscriber`` — per-connection delivery queue
"""

from __future__ import annotations

from donation_alerts.notifications.events import (
    Donation,
    DonationEvent,
    RawEvent,
    build_test_donation,
    utc_timestamp,
)
from donation_alerts.notifications.hub import BroadcastHub, Subscriber

__all__ = [
    "BroadcastHub",
    "Donation",
    "DonationEvent",
    "RawEvent",
    "Subscriber",
    "build_test_donation",
    "utc_timestamp",
]
