"""Pydantic schemas exchanged with callers of the webhook service."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from ironhook.models.webhook_endpoint import EndpointStatus, WebhookEndpointRecord
from ironhook.models.webhook_notification import WebhookNotificationRecord


class WebhookEndpoint(BaseModel):
    """A registered webhook destination."""

    id: Optional[UUID] = Field(None, description="Assigned on creation when omitted")
    url: str = Field("", description="Absolute http/https URL")
    status: EndpointStatus = Field(
        EndpointStatus.UNVERIFIED,
        description="Ignored on creation; endpoints always start unverified",
    )

    @classmethod
    def from_record(cls, record: WebhookEndpointRecord) -> "WebhookEndpoint":
        return cls(id=record.uuid, url=record.url, status=record.status)


class WebhookNotification(BaseModel):
    """
    An event announcement sent to a verified endpoint.

    Serialized as the JSON request body:
    {"event_uuid": "<uuid>", "topic": "<string>", "body": "<string>"}
    """

    event_uuid: UUID
    topic: str = ""
    body: str = ""

    @classmethod
    def from_record(cls, record: WebhookNotificationRecord) -> "WebhookNotification":
        return cls(event_uuid=record.event_uuid, topic=record.topic, body=record.body)

    def to_record(self, endpoint_id: UUID) -> WebhookNotificationRecord:
        return WebhookNotificationRecord(
            event_uuid=self.event_uuid,
            topic=self.topic,
            body=self.body,
            endpoint_uuid=endpoint_id,
        )
