"""Broadcast hub — fan-out of donations to connected subscribers.

One hub per application: every overlay connected to the same app observes
the same stream of donations. Delivery is fire-and-forget; a subscriber that
registers after a broadcast never sees that record.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import uuid
from typing import TYPE_CHECKING

from donation_alerts.notifications.events import DonationEvent

if TYPE_CHECKING:
    from donation_alerts.notifications.events import Donation, RawEvent

logger = logging.getLogger(__name__)


class Subscriber:
    """A connected real-time viewer, identified by its session id.

    Events handed to the subscriber are buffered in an asyncio queue until
    the transport drains them with :meth:`next_event`.
    """

    def __init__(self, session_id: str | None = None, *, buffer: int = 0) -> None:
        self.session_id = session_id or uuid.uuid4().hex
        self._queue: asyncio.Queue[RawEvent] = asyncio.Queue(maxsize=buffer)

    def __repr__(self) -> str:
        return f"Subscriber({self.session_id!r})"

    def deliver(self, event: RawEvent) -> bool:
        """Hand an event to this subscriber without blocking.

        Returns False if the buffer is bounded and full.
        """
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            logger.warning("Subscriber %s queue full — dropping %s event", self.session_id, event.type)
            return False
        return True

    async def next_event(self) -> RawEvent:
        """Wait for the next delivered event."""
        return await self._queue.get()

    def drain(self) -> list[RawEvent]:
        """Return all pending events without waiting."""
        events: list[RawEvent] = []
        while True:
            try:
                events.append(self._queue.get_nowait())
            except asyncio.QueueEmpty:
                return events


class BroadcastHub:
    """Registry of connected subscribers.

    Usage::

        hub = BroadcastHub()
        sub = Subscriber()
        hub.register(sub)
        hub.broadcast(donation)
        event = await sub.next_event()
        hub.unregister(sub)
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, Subscriber] = {}
        self._lock = threading.Lock()

    @property
    def subscriber_count(self) -> int:
        """Number of currently connected subscribers."""
        with self._lock:
            return len(self._subscribers)

    def register(self, subscriber: Subscriber) -> None:
        """Add a subscriber to the connected set."""
        with self._lock:
            self._subscribers[subscriber.session_id] = subscriber

    def unregister(self, subscriber: Subscriber) -> None:
        """Remove a subscriber. Unknown subscribers are ignored."""
        with self._lock:
            if self._subscribers.get(subscriber.session_id) is subscriber:
                del self._subscribers[subscriber.session_id]

    def snapshot(self) -> list[Subscriber]:
        """Return the subscribers connected right now."""
        with self._lock:
            return list(self._subscribers.values())

    def broadcast(self, donation: Donation) -> int:
        """Deliver *donation* to every connected subscriber.

        Returns the number of subscribers the donation was handed to.
        """
        event = DonationEvent.from_donation(donation)
        delivered = 0
        for subscriber in self.snapshot():
            if subscriber.deliver(event):
                delivered += 1
        logger.info(
            "Broadcast donation %.2f %s from %s to %d subscriber(s)",
            donation.amount,
            donation.currency,
            donation.donor_name,
            delivered,
        )
        return delivered
