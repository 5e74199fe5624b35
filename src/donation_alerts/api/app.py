"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from prometheus_client import generate_latest
from starlette.responses import Response

from donation_alerts import __version__
from donation_alerts.api import donations, realtime, status, webhooks
from donation_alerts.api.middleware.cors import setup_cors
from donation_alerts.config.settings import AppConfig
from donation_alerts.errors.alert_errors import AlertError
from donation_alerts.metrics.collector import AlertMetrics
from donation_alerts.metrics.middleware import PrometheusMiddleware
from donation_alerts.notifications.hub import BroadcastHub
from donation_alerts.payments.verifier import WebhookVerifier

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle hooks."""
    config: AppConfig = app.state.config
    port = config.server.port
    logger.info("Donation alert server running on port %d", port)
    logger.info("Browser source: http://localhost:%d/alert.html", port)
    logger.info("Test donation:  POST http://localhost:%d/test-donation", port)
    try:
        yield
    finally:
        hub: BroadcastHub = app.state.hub
        logger.info(
            "Donation alert server shut down (%d subscriber(s) still connected)",
            hub.subscriber_count,
        )


def create_app(*, config: AppConfig | None = None, hub: BroadcastHub | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        config: Optional AppConfig. If *None*, a default config is created
            from environment variables.
        hub: Optional broadcast hub. Each app gets its own hub by default so
            independent instances never share subscribers.
    """
    if config is None:
        config = AppConfig()

    app = FastAPI(
        title="donation-alerts",
        version=__version__,
        description="Stripe donation webhooks broadcast to live overlays",
        lifespan=_lifespan,
    )

    app.state.config = config
    app.state.hub = hub if hub is not None else BroadcastHub()
    app.state.verifier = WebhookVerifier(config.stripe)
    app.state.metrics = AlertMetrics()

    # -- Middleware --
    setup_cors(app)
    if config.metrics.enabled:
        app.add_middleware(PrometheusMiddleware, registry=app.state.metrics.registry)

    # -- Error handler --
    @app.exception_handler(AlertError)
    async def _alert_error_handler(request: Request, exc: AlertError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"code": exc.code, "message": exc.message},
        )

    # -- Base routes --
    @app.get("/health", tags=["base"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    if config.metrics.enabled:

        @app.get("/metrics", tags=["base"], include_in_schema=False)
        async def metrics_endpoint() -> Response:
            """Prometheus metrics endpoint."""
            return Response(
                content=generate_latest(app.state.metrics.registry),
                media_type="text/plain; version=0.0.4; charset=utf-8",
            )

    app.include_router(status.router)
    app.include_router(webhooks.router)
    app.include_router(donations.router)
    app.include_router(realtime.router)

    # -- Overlay assets (alert.html etc.), matched after every route --
    static_dir = config.server.static_dir
    if static_dir:
        if Path(static_dir).is_dir():
            app.mount("/", StaticFiles(directory=static_dir), name="overlay")
        else:
            logger.warning("Static directory %s does not exist — overlay assets not served", static_dir)

    return app
