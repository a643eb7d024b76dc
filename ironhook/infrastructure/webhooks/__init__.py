"""Webhook infrastructure module."""

from ironhook.infrastructure.webhooks.transport import (
    DEFAULT_TIMEOUT_SECONDS,
    HttpxWebhookTransport,
    WebhookTransport,
)

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "HttpxWebhookTransport",
    "WebhookTransport",
]
