"""Durable storage for webhook endpoints and delivered notifications."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, List, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ironhook.database.database import Database
from ironhook.models.base import Base
from ironhook.models.webhook_endpoint import WebhookEndpointRecord
from ironhook.models.webhook_notification import WebhookNotificationRecord
from ironhook.utils.errors import PersistenceError, create_not_found_error

logger = logging.getLogger(__name__)

T = TypeVar("T")
RecordT = TypeVar("RecordT", bound=Base)


class RecordStore(ABC):
    """
    Storage operations used by the webhook services.

    Implementations raise NotFoundError for missing rows and
    PersistenceError for storage failures.
    """

    @abstractmethod
    def insert(self, record: RecordT) -> RecordT:
        """Persist a new endpoint or notification row."""
        pass

    @abstractmethod
    def find_by_id(self, endpoint_id: UUID) -> WebhookEndpointRecord:
        """Fetch a live endpoint by its UUID."""
        pass

    @abstractmethod
    def save(self, record: WebhookEndpointRecord) -> WebhookEndpointRecord:
        """Persist changes to an existing endpoint."""
        pass

    @abstractmethod
    def delete(self, record: WebhookEndpointRecord) -> None:
        """Remove an endpoint; later lookups must not find it."""
        pass

    @abstractmethod
    def find_all(self) -> List[WebhookEndpointRecord]:
        """All live endpoints in insertion order."""
        pass

    @abstractmethod
    def find_latest_by_foreign_key(self, endpoint_id: UUID) -> WebhookNotificationRecord:
        """The most recently inserted notification for an endpoint."""
        pass


class SqlAlchemyRecordStore(RecordStore):
    """
    Record store backed by a SQLAlchemy database.

    Each call runs in its own session. Deletes are soft: the row
    keeps its data and gets a deleted_at timestamp.
    """

    def __init__(self, database: Database):
        self.database = database

    def _run(self, operation: str, work: Callable[[Session], T]) -> T:
        try:
            with self.database.session_scope() as session:
                return work(session)
        except SQLAlchemyError as e:
            logger.error(f"Couldn't {operation}: {e}")
            raise PersistenceError(
                message=f"Couldn't {operation}",
                details={"reason": str(e)},
            ) from e

    def insert(self, record: RecordT) -> RecordT:
        def work(session: Session) -> RecordT:
            session.add(record)
            session.flush()
            session.refresh(record)
            return record

        return self._run(f"insert {type(record).__name__}", work)

    def find_by_id(self, endpoint_id: UUID) -> WebhookEndpointRecord:
        def work(session: Session) -> WebhookEndpointRecord:
            record = session.scalars(
                select(WebhookEndpointRecord)
                .where(
                    WebhookEndpointRecord.uuid == endpoint_id,
                    WebhookEndpointRecord.deleted_at.is_(None),
                )
                .order_by(WebhookEndpointRecord.id)
                .limit(1)
            ).first()

            if record is None:
                logger.error(f"Haven't found webhook endpoint {endpoint_id} in the database")
                raise create_not_found_error("Webhook endpoint", endpoint_id)
            return record

        return self._run("fetch a webhook endpoint", work)

    def save(self, record: WebhookEndpointRecord) -> WebhookEndpointRecord:
        def work(session: Session) -> WebhookEndpointRecord:
            merged = session.merge(record)
            session.flush()
            session.refresh(merged)
            return merged

        return self._run("save a webhook endpoint", work)

    def delete(self, record: WebhookEndpointRecord) -> None:
        def work(session: Session) -> None:
            merged = session.merge(record)
            merged.deleted_at = datetime.now(timezone.utc)

        self._run("delete a webhook endpoint", work)

    def find_all(self) -> List[WebhookEndpointRecord]:
        def work(session: Session) -> List[WebhookEndpointRecord]:
            return list(session.scalars(
                select(WebhookEndpointRecord)
                .where(WebhookEndpointRecord.deleted_at.is_(None))
                .order_by(WebhookEndpointRecord.id)
            ).all())

        return self._run("list webhook endpoints", work)

    def find_latest_by_foreign_key(self, endpoint_id: UUID) -> WebhookNotificationRecord:
        def work(session: Session) -> WebhookNotificationRecord:
            record = session.scalars(
                select(WebhookNotificationRecord)
                .where(WebhookNotificationRecord.endpoint_uuid == endpoint_id)
                .order_by(WebhookNotificationRecord.id.desc())
                .limit(1)
            ).first()

            if record is None:
                logger.error(f"Couldn't find any notifications for endpoint {endpoint_id}")
                raise create_not_found_error("Webhook notification", endpoint_id)
            return record

        return self._run("fetch a webhook notification", work)
