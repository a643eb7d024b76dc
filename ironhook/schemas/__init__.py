"""Schemas package for webhook value types."""

from ironhook.schemas.webhook import WebhookEndpoint, WebhookNotification

__all__ = [
    "WebhookEndpoint",
    "WebhookNotification",
]
