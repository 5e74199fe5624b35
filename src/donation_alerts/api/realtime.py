"""WebSocket endpoint streaming donations to overlays.

Each connection becomes one :class:`Subscriber` on the hub. The subscriber
is registered before the handshake completes so that a donation broadcast
right after ``connect`` is never missed, and unregistered once the client
goes away or sending to it fails. Frames sent by the client are read and
discarded.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from donation_alerts.api.dependencies import get_config, get_hub, get_metrics
from donation_alerts.config.settings import AppConfig  # noqa: TC001
from donation_alerts.metrics.collector import AlertMetrics  # noqa: TC001
from donation_alerts.notifications.hub import BroadcastHub, Subscriber

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


async def _forward(websocket: WebSocket, subscriber: Subscriber) -> None:
    """Send every event delivered to *subscriber* as a JSON text frame."""
    try:
        while True:
            event = await subscriber.next_event()
            await websocket.send_json(event.to_dict())
    except WebSocketDisconnect:
        logger.debug("Client %s went away while sending", subscriber.session_id)


async def _discard_incoming(websocket: WebSocket) -> None:
    """Read and drop client frames until the client disconnects."""
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


@router.websocket("/ws")
async def donation_stream(
    websocket: WebSocket,
    config: Annotated[AppConfig, Depends(get_config)],
    hub: Annotated[BroadcastHub, Depends(get_hub)],
    metrics: Annotated[AlertMetrics, Depends(get_metrics)],
) -> None:
    subscriber = Subscriber(buffer=config.server.subscriber_buffer)
    hub.register(subscriber)
    metrics.set_subscriber_count(hub.subscriber_count)
    logger.info("Client connected: %s", subscriber.session_id)
    try:
        await websocket.accept()
        sender = asyncio.create_task(_forward(websocket, subscriber))
        receiver = asyncio.create_task(_discard_incoming(websocket))
        # Whichever side stops first ends the stream
        try:
            await asyncio.wait({sender, receiver}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            sender.cancel()
            receiver.cancel()
            outcomes = await asyncio.gather(sender, receiver, return_exceptions=True)
        for outcome in outcomes:
            if isinstance(outcome, Exception):
                logger.warning("Stream to %s stopped: %r", subscriber.session_id, outcome)
    finally:
        hub.unregister(subscriber)
        metrics.set_subscriber_count(hub.subscriber_count)
        logger.info("Client disconnected: %s", subscriber.session_id)
