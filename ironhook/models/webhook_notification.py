"""WebhookNotification model, the append-only delivery log."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Index, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from ironhook.models.base import Base


class WebhookNotificationRecord(Base):
    """
    Record of a notification sent to an endpoint.

    Written once per delivery attempt that got an HTTP response,
    whatever the status code. Rows are never updated.
    """

    __tablename__ = "webhook_notifications"

    # Primary Key, also the insertion order
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    event_uuid: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
    )

    topic: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    # Target endpoint's public UUID
    endpoint_uuid: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("ix_webhook_notifications_endpoint_uuid", "endpoint_uuid"),
    )

    def __repr__(self) -> str:
        return f"<WebhookNotificationRecord(event_uuid={self.event_uuid}, endpoint_uuid={self.endpoint_uuid})>"
