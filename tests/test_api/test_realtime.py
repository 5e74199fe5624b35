"""Tests for the /ws donation stream."""

from __future__ import annotations

import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from donation_alerts.api.realtime import donation_stream
from donation_alerts.metrics.collector import AlertMetrics
from donation_alerts.notifications.events import build_test_donation
from donation_alerts.notifications.hub import BroadcastHub


def test_connected_client_receives_test_donation(app) -> None:
    with TestClient(app) as client, client.websocket_connect("/ws") as ws:
        client.post("/test-donation", json={"donorName": "Jane"})
        message = ws.receive_json()
    assert message["type"] == "donation"
    assert message["content"]["donorName"] == "Jane"
    assert message["content"]["amount"] == 10.00


def test_connected_client_receives_webhook_donation(app, checkout_event, sign) -> None:
    body = json.dumps(checkout_event(customer_name="Bob"))
    with TestClient(app) as client, client.websocket_connect("/ws") as ws:
        response = client.post("/webhook", content=body, headers={"Stripe-Signature": sign(body)})
        assert response.status_code == 200
        message = ws.receive_json()
    assert message["content"]["donorName"] == "Bob"
    assert message["content"]["amount"] == 25.99


def test_every_client_receives_broadcast(app) -> None:
    with (
        TestClient(app) as client,
        client.websocket_connect("/ws") as first,
        client.websocket_connect("/ws") as second,
    ):
        client.post("/test-donation")
        assert first.receive_json()["content"]["donorName"] == "Test Donor"
        assert second.receive_json()["content"]["donorName"] == "Test Donor"


def test_connection_registers_subscriber(app) -> None:
    with TestClient(app) as client, client.websocket_connect("/ws"):
        assert app.state.hub.subscriber_count == 1
        assert '<span id="count">1</span>' in client.get("/").text
        assert "donation_alerts_subscribers 1.0" in client.get("/metrics").text


def test_client_frames_are_ignored(app) -> None:
    with TestClient(app) as client, client.websocket_connect("/ws") as ws:
        ws.send_text("hello")
        ws.send_bytes(b"\x00\x01")
        client.post("/test-donation", json={"message": "still here"})
        assert ws.receive_json()["content"]["message"] == "still here"


class _BrokenSocket:
    """Accepts the handshake, then fails every send; the client never speaks."""

    def __init__(self) -> None:
        self.sent = 0

    async def accept(self) -> None:
        return None

    async def send_json(self, data: object) -> None:
        self.sent += 1
        raise RuntimeError("Cannot call 'send' once a close message has been sent.")

    async def receive(self) -> dict[str, str]:
        await asyncio.Event().wait()
        return {"type": "websocket.disconnect"}


@pytest.mark.asyncio
async def test_failed_send_unregisters_subscriber(app_config, caplog) -> None:
    hub = BroadcastHub()
    metrics = AlertMetrics()
    socket = _BrokenSocket()
    stream = asyncio.create_task(donation_stream(socket, app_config, hub, metrics))
    while hub.subscriber_count == 0:
        await asyncio.sleep(0)

    hub.broadcast(build_test_donation())
    await asyncio.wait_for(stream, timeout=1.0)

    assert socket.sent == 1
    assert hub.subscriber_count == 0
    assert "Stream to" in caplog.text
