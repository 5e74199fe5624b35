"""API middleware — CORS."""

from donation_alerts.api.middleware.cors import setup_cors

__all__ = ["setup_cors"]
