"""FastAPI dependency injection helpers.

Everything shared between requests lives on ``app.state`` and is created by
:func:`donation_alerts.api.app.create_app`. These callables accept an
``HTTPConnection`` so they work for both HTTP routes and WebSocket routes.

Usage in a route::

    @router.post("/test-donation")
    async def trigger_test_donation(
        hub: Annotated[BroadcastHub, Depends(get_hub)],
    ) -> ...:
        ...
"""

from __future__ import annotations

from fastapi.requests import HTTPConnection

from donation_alerts.config.settings import AppConfig  # noqa: TC001
from donation_alerts.metrics.collector import AlertMetrics  # noqa: TC001
from donation_alerts.notifications.hub import BroadcastHub  # noqa: TC001
from donation_alerts.payments.verifier import WebhookVerifier  # noqa: TC001


def get_config(connection: HTTPConnection) -> AppConfig:
    """Retrieve the application config from ``app.state``."""
    return connection.app.state.config


def get_hub(connection: HTTPConnection) -> BroadcastHub:
    """Retrieve the broadcast hub shared by every subscriber of this app."""
    return connection.app.state.hub


def get_verifier(connection: HTTPConnection) -> WebhookVerifier:
    """Retrieve the Stripe webhook verifier."""
    return connection.app.state.verifier


def get_metrics(connection: HTTPConnection) -> AlertMetrics:
    """Retrieve the alert metrics."""
    return connection.app.state.metrics
