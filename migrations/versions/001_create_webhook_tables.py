"""Create webhook_endpoints and webhook_notifications tables.

Revision ID: 001
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create webhook tables with their indexes."""

    op.create_table(
        "webhook_endpoints",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.Uuid, nullable=False),
        sa.Column("url", sa.String(2048), nullable=False),
        sa.Column(
            "status",
            sa.Enum(
                "unverified",
                "suspended",
                "verified",
                "healthy",
                name="webhook_endpoint_status",
            ),
            nullable=False,
        ),
        # Timestamps
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_webhook_endpoints_uuid", "webhook_endpoints", ["uuid"])
    op.create_index("ix_webhook_endpoints_deleted_at", "webhook_endpoints", ["deleted_at"])

    # Append-only delivery log
    op.create_table(
        "webhook_notifications",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("event_uuid", sa.Uuid, nullable=False),
        sa.Column("topic", sa.Text, nullable=False),
        sa.Column("body", sa.Text, nullable=False),
        sa.Column("endpoint_uuid", sa.Uuid, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_webhook_notifications_endpoint_uuid", "webhook_notifications", ["endpoint_uuid"])


def downgrade() -> None:
    """Drop webhook tables."""

    op.drop_index("ix_webhook_notifications_endpoint_uuid", table_name="webhook_notifications")
    op.drop_table("webhook_notifications")

    op.drop_index("ix_webhook_endpoints_deleted_at", table_name="webhook_endpoints")
    op.drop_index("ix_webhook_endpoints_uuid", table_name="webhook_endpoints")
    op.drop_table("webhook_endpoints")

    sa.Enum(name="webhook_endpoint_status").drop(op.get_bind(), checkfirst=True)
