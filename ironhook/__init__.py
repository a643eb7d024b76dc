"""Webhook endpoint registration, verification and notification delivery."""

from ironhook.config.settings import WebhookSettings
from ironhook.models.webhook_endpoint import EndpointStatus
from ironhook.schemas.webhook import WebhookEndpoint, WebhookNotification
from ironhook.services.webhook_endpoint_service import WebhookEndpointService

__all__ = [
    "EndpointStatus",
    "WebhookEndpoint",
    "WebhookEndpointService",
    "WebhookNotification",
    "WebhookSettings",
]
