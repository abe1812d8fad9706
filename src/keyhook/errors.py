"""Keyhook exception hierarchy.

All keyhook-specific exceptions inherit from KeyhookError so the listener
boundary can catch them with a single clause.
"""


class KeyhookError(Exception):
    """Base exception for all keyhook errors."""

    def __init__(self, message: str = "", *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable


class ConfigError(KeyhookError):
    """Invalid or missing configuration."""


class MalformedRepresentationError(KeyhookError):
    """Admin event representation is not a JSON object."""


class PublishError(KeyhookError):
    """Webhook delivery failed."""

    def __init__(self, message: str = "", *, status_code: int | None = None) -> None:
        super().__init__(message, retryable=False)
        self.status_code = status_code
