"""Tests for the broadcast hub and subscribers."""

from __future__ import annotations

import asyncio
import threading

import pytest

from donation_alerts.notifications.events import Donation, DonationEvent, RawEvent
from donation_alerts.notifications.hub import BroadcastHub, Subscriber


def _donation(name: str = "Jane", amount: float = 5.0) -> Donation:
    return Donation(amount=amount, currency="USD", donor_name=name, timestamp="2025-01-01T00:00:00.000Z")


def _names(subscriber: Subscriber) -> list[str]:
    return [event.content["donorName"] for event in subscriber.drain()]


class TestSubscriber:
    def test_generated_session_ids_are_unique(self) -> None:
        assert Subscriber().session_id != Subscriber().session_id

    def test_explicit_session_id(self) -> None:
        assert Subscriber("abc").session_id == "abc"

    def test_drain_empty(self) -> None:
        assert Subscriber().drain() == []

    def test_bounded_buffer_drops_when_full(self) -> None:
        sub = Subscriber(buffer=1)
        assert sub.deliver(RawEvent(type="a"))
        assert not sub.deliver(RawEvent(type="b"))
        assert [e.type for e in sub.drain()] == ["a"]

    @pytest.mark.asyncio
    async def test_next_event_waits_for_delivery(self) -> None:
        sub = Subscriber()
        waiter = asyncio.create_task(sub.next_event())
        await asyncio.sleep(0)
        assert not waiter.done()
        sub.deliver(RawEvent(type="donation"))
        event = await asyncio.wait_for(waiter, timeout=1.0)
        assert event.type == "donation"


class TestBroadcastHub:
    def test_register_unregister(self) -> None:
        hub = BroadcastHub()
        sub = Subscriber()
        hub.register(sub)
        assert hub.subscriber_count == 1
        hub.unregister(sub)
        assert hub.subscriber_count == 0

    def test_broadcast_without_subscribers(self) -> None:
        assert BroadcastHub().broadcast(_donation()) == 0

    def test_broadcast_reaches_every_subscriber(self) -> None:
        hub = BroadcastHub()
        subs = [Subscriber() for _ in range(3)]
        for sub in subs:
            hub.register(sub)
        assert hub.broadcast(_donation("Jane")) == 3
        for sub in subs:
            assert _names(sub) == ["Jane"]

    def test_broadcast_envelope(self) -> None:
        hub = BroadcastHub()
        sub = Subscriber()
        hub.register(sub)
        donation = _donation()
        hub.broadcast(donation)
        (event,) = sub.drain()
        assert isinstance(event, DonationEvent)
        assert event.to_dict() == {"type": "donation", "content": donation.to_dict()}

    def test_late_subscriber_misses_earlier_broadcast(self) -> None:
        hub = BroadcastHub()
        s, t = Subscriber(), Subscriber()
        hub.register(s)
        hub.broadcast(_donation("R"))
        hub.register(t)
        hub.broadcast(_donation("R2"))
        assert _names(s) == ["R", "R2"]
        assert _names(t) == ["R2"]

    def test_unregister_unknown_is_noop(self) -> None:
        hub = BroadcastHub()
        sub = Subscriber()
        hub.register(sub)
        hub.unregister(Subscriber())
        hub.unregister(Subscriber())
        assert hub.broadcast(_donation()) == 1
        assert _names(sub) == ["Jane"]

    def test_unregistered_subscriber_stops_receiving(self) -> None:
        hub = BroadcastHub()
        sub = Subscriber()
        hub.register(sub)
        hub.unregister(sub)
        hub.broadcast(_donation())
        assert sub.drain() == []

    def test_unregister_twice(self) -> None:
        hub = BroadcastHub()
        sub = Subscriber()
        hub.register(sub)
        hub.unregister(sub)
        hub.unregister(sub)
        assert hub.subscriber_count == 0

    def test_unregister_different_handle_with_same_id(self) -> None:
        hub = BroadcastHub()
        original = Subscriber("same")
        hub.register(original)
        hub.unregister(Subscriber("same"))
        assert hub.snapshot() == [original]

    def test_full_subscriber_does_not_block_others(self) -> None:
        hub = BroadcastHub()
        full, healthy = Subscriber(buffer=1), Subscriber()
        hub.register(full)
        hub.register(healthy)
        assert hub.broadcast(_donation("A")) == 2
        assert hub.broadcast(_donation("B")) == 1
        assert _names(healthy) == ["A", "B"]

    def test_independent_hubs(self) -> None:
        a, b = BroadcastHub(), BroadcastHub()
        sub = Subscriber()
        a.register(sub)
        b.broadcast(_donation())
        assert sub.drain() == []

    def test_concurrent_registration_during_broadcast(self) -> None:
        hub = BroadcastHub()
        keeper = Subscriber()
        hub.register(keeper)
        stop = threading.Event()

        def churn() -> None:
            while not stop.is_set():
                sub = Subscriber()
                hub.register(sub)
                hub.unregister(sub)

        worker = threading.Thread(target=churn)
        worker.start()
        try:
            for _ in range(200):
                hub.broadcast(_donation())
        finally:
            stop.set()
            worker.join()
        assert len(keeper.drain()) == 200
