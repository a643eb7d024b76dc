"""WebhookEndpoint model and endpoint lifecycle."""

import enum
from datetime import datetime
from typing import Dict, FrozenSet, Optional
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Enum, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from ironhook.models.base import Base
from ironhook.utils.errors import InvalidStatusTransitionError


class EndpointStatus(str, enum.Enum):
    """Lifecycle status of a webhook endpoint."""

    UNVERIFIED = "unverified"
    SUSPENDED = "suspended"
    VERIFIED = "verified"
    HEALTHY = "healthy"

    @property
    def is_activated(self) -> bool:
        """Whether the endpoint passed verification and may receive notifications."""
        return self in ACTIVATED_STATUSES


ACTIVATED_STATUSES: FrozenSet[EndpointStatus] = frozenset({
    EndpointStatus.VERIFIED,
    EndpointStatus.HEALTHY,
})

# Allowed status changes. A URL change always drops back to UNVERIFIED;
# only a passed verification promotes to VERIFIED. SUSPENDED and HEALTHY
# are never entered by the service itself.
ALLOWED_TRANSITIONS: Dict[EndpointStatus, FrozenSet[EndpointStatus]] = {
    EndpointStatus.UNVERIFIED: frozenset({EndpointStatus.UNVERIFIED, EndpointStatus.VERIFIED}),
    EndpointStatus.SUSPENDED: frozenset({EndpointStatus.UNVERIFIED, EndpointStatus.VERIFIED}),
    EndpointStatus.VERIFIED: frozenset({EndpointStatus.UNVERIFIED}),
    EndpointStatus.HEALTHY: frozenset({EndpointStatus.UNVERIFIED}),
}


def can_transition(current: EndpointStatus, target: EndpointStatus) -> bool:
    """Check a status change against the endpoint lifecycle."""
    return target in ALLOWED_TRANSITIONS[current]


class WebhookEndpointRecord(Base):
    """
    Stored webhook endpoint.

    The integer primary key keeps insertion order; callers only ever
    see the UUID. Deleted endpoints keep their row with deleted_at set.
    """

    __tablename__ = "webhook_endpoints"

    # Primary Key
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Public identifier
    uuid: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
        default=uuid4,
    )

    url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
    )

    status: Mapped[EndpointStatus] = mapped_column(
        Enum(
            EndpointStatus,
            name="webhook_endpoint_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=EndpointStatus.UNVERIFIED,
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    __table_args__ = (
        Index("ix_webhook_endpoints_uuid", "uuid"),
        Index("ix_webhook_endpoints_deleted_at", "deleted_at"),
    )

    def transition_to(self, target: EndpointStatus) -> None:
        """Move to a new status, enforcing the endpoint lifecycle."""
        if not can_transition(self.status, target):
            raise InvalidStatusTransitionError(
                message=f"Endpoint can't move from {self.status.value} to {target.value}",
                details={"uuid": str(self.uuid), "from": self.status.value, "to": target.value},
            )
        self.status = target

    def __repr__(self) -> str:
        return f"<WebhookEndpointRecord(uuid={self.uuid}, url={self.url}, status={self.status.value})>"
