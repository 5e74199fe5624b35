"""AlertError — base exception class for all donation-alert errors."""

from __future__ import annotations


class AlertError(Exception):
    """Base error for all donation alert operations.

    Attributes:
        message: Human-readable error description.
        status_code: Suggested HTTP status code.
        code: Machine-readable error code string.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 500,
        code: str = "alert-error",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class WebhookError(AlertError):
    """Error raised while authenticating or shaping an inbound webhook."""

    def __init__(self, message: str, *, status_code: int = 400, code: str = "webhook-error") -> None:
        super().__init__(f"Webhook Error: {message}", status_code=status_code, code=code)
