"""Donation Alerts — Stripe webhooks to real-time overlay alerts."""

__version__ = "0.1.0"
