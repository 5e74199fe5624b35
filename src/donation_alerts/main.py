"""Application entry point for the donation alert server."""

from __future__ import annotations

import os

import uvicorn

from donation_alerts.config.settings import AppConfig


def main() -> None:
    """Start the donation alert server."""
    config = AppConfig()
    reload = os.getenv("DONATIONS_RELOAD", "false").lower() in ("1", "true", "yes")
    uvicorn.run(
        "donation_alerts.api.app:create_app",
        factory=True,
        host=config.server.host,
        port=config.server.port,
        reload=reload,
        log_level="debug" if config.debug else "info",
    )


if __name__ == "__main__":
    main()
