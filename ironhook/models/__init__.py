"""Models package for webhook endpoints and notifications."""

from ironhook.models.base import Base
from ironhook.models.webhook_endpoint import (
    ACTIVATED_STATUSES,
    ALLOWED_TRANSITIONS,
    EndpointStatus,
    WebhookEndpointRecord,
    can_transition,
)
from ironhook.models.webhook_notification import WebhookNotificationRecord

__all__ = [
    "ACTIVATED_STATUSES",
    "ALLOWED_TRANSITIONS",
    "Base",
    "EndpointStatus",
    "WebhookEndpointRecord",
    "WebhookNotificationRecord",
    "can_transition",
]
