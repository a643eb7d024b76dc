"""
Webhook Endpoint Service

Registers webhook endpoints, verifies them and sends them notifications,
keeping a durable record of every delivery.
"""

import logging
from typing import List, Optional, Union
from uuid import UUID, uuid4

from ironhook.config.settings import WebhookSettings
from ironhook.database.database import Database
from ironhook.database.record_store import RecordStore, SqlAlchemyRecordStore
from ironhook.infrastructure.webhooks.transport import HttpxWebhookTransport, WebhookTransport
from ironhook.models.webhook_endpoint import EndpointStatus, WebhookEndpointRecord
from ironhook.schemas.webhook import WebhookEndpoint, WebhookNotification
from ironhook.services.endpoint_verification_service import EndpointVerificationService
from ironhook.services.notification_delivery_service import NotificationDeliveryService
from ironhook.utils.errors import (
    InvalidIDError,
    MissingIDError,
    NotFoundError,
    create_duplicate_error,
)
from ironhook.utils.log_config import configure_logging
from ironhook.utils.url_policy import validate_url

logger = logging.getLogger(__name__)

EndpointId = Union[UUID, str, None]

NIL_UUID = UUID(int=0)


def coerce_endpoint_id(endpoint_id: EndpointId) -> UUID:
    """Normalize a caller supplied endpoint id."""
    if endpoint_id is None or endpoint_id == "":
        raise MissingIDError()
    if isinstance(endpoint_id, UUID):
        coerced = endpoint_id
    else:
        try:
            coerced = UUID(str(endpoint_id))
        except ValueError as e:
            raise InvalidIDError(details={"id": str(endpoint_id)}) from e

    if coerced == NIL_UUID:
        raise MissingIDError()
    return coerced


class WebhookEndpointService:
    """
    Complete webhook endpoint management service.

    Features:
    - Endpoint registration, URL updates and removal
    - Challenge-response verification of endpoint ownership
    - Notification delivery with a persisted delivery log

    Typical flow:

        endpoint = service.create(WebhookEndpoint(url="https://example.com/hooks"))
        service.verify(endpoint.id)
        service.notify(endpoint.id, WebhookNotification(event_uuid=uuid4(), topic="t"))
    """

    def __init__(
        self,
        settings: Optional[WebhookSettings] = None,
        database: Optional[Database] = None,
        store: Optional[RecordStore] = None,
        transport: Optional[WebhookTransport] = None,
    ):
        self.settings = settings or WebhookSettings()

        self._owned_database: Optional[Database] = None
        if store is None:
            if database is None:
                database = Database(self.settings.database_config())
                database.init_db()
                self._owned_database = database
            store = SqlAlchemyRecordStore(database)
        self.store = store

        self._owns_transport = transport is None
        self.transport = transport or HttpxWebhookTransport(
            timeout_seconds=self.settings.http_timeout_seconds,
        )

        self.verification = EndpointVerificationService(self.store, self.transport)
        self.delivery = NotificationDeliveryService(
            fetch_endpoint=self.get,
            store=self.store,
            transport=self.transport,
            method=self.settings.notification_method,
        )

    @classmethod
    def from_env(cls, transport: Optional[WebhookTransport] = None) -> "WebhookEndpointService":
        """
        Build a service from HOOK_* environment variables.

        Configures logging, connects to the database and creates the
        tables if they don't exist yet.
        """
        settings = WebhookSettings.from_env()
        configure_logging(settings.log_level)

        logger.info(f"Getting a {settings.db_engine} record store")
        database = Database(settings.database_config())

        logger.info("Applying database schema")
        database.init_db()

        logger.info("Pulling together a new webhooks service")
        service = cls(settings=settings, database=database, transport=transport)
        service._owned_database = database
        return service

    # =========================================================================
    # Endpoint Management
    # =========================================================================

    def create(self, endpoint: WebhookEndpoint) -> WebhookEndpoint:
        """
        Register a new, unverified endpoint.

        A missing or nil id gets a freshly generated one. Any status on
        the input is ignored. Verify the endpoint next, otherwise it
        won't receive notifications:

            service.verify(endpoint.id)
        """
        validate_url(endpoint.url)

        if endpoint.id is None or endpoint.id == NIL_UUID:
            endpoint_id = uuid4()
        else:
            endpoint_id = endpoint.id
            try:
                self.store.find_by_id(endpoint_id)
            except NotFoundError:
                pass
            else:
                raise create_duplicate_error("Webhook endpoint", endpoint_id)

        logger.info(f"Creating a new endpoint {endpoint_id} -> {endpoint.url}")
        record = self.store.insert(WebhookEndpointRecord(
            uuid=endpoint_id,
            url=endpoint.url,
            status=EndpointStatus.UNVERIFIED,
        ))
        logger.info(f"A new endpoint created: {endpoint_id}")

        return WebhookEndpoint.from_record(record)

    def update_url(self, endpoint_id: EndpointId, url: str) -> WebhookEndpoint:
        """
        Point an endpoint at a new URL.

        A changed URL puts the endpoint back to unverified, so it has to
        be verified again before it receives notifications. Setting the
        current URL again changes nothing.
        """
        record = self.store.find_by_id(coerce_endpoint_id(endpoint_id))

        if url == record.url:
            logger.info(f"URL of endpoint {record.uuid} is same as before, nothing to do")
            return WebhookEndpoint.from_record(record)

        validate_url(url)

        logger.info(f"Updating the URL and status of endpoint {record.uuid}")
        record.url = url
        record.transition_to(EndpointStatus.UNVERIFIED)
        record = self.store.save(record)

        return WebhookEndpoint.from_record(record)

    def verify(self, endpoint_id: EndpointId) -> WebhookEndpoint:
        """
        Verify the caller controls the endpoint.

        Already verified endpoints are returned without contacting them.
        """
        return self.verification.verify(coerce_endpoint_id(endpoint_id))

    def get(self, endpoint_id: EndpointId) -> WebhookEndpoint:
        """Fetch an endpoint by id."""
        record = self.store.find_by_id(coerce_endpoint_id(endpoint_id))
        return WebhookEndpoint.from_record(record)

    def delete(self, endpoint_id: EndpointId) -> None:
        """Remove an endpoint; its delivery log is kept."""
        record = self.store.find_by_id(coerce_endpoint_id(endpoint_id))
        self.store.delete(record)
        logger.info(f"Deleted endpoint {record.uuid}")

    def list_endpoints(self) -> List[WebhookEndpoint]:
        """List all endpoints in registration order."""
        return [WebhookEndpoint.from_record(r) for r in self.store.find_all()]

    # =========================================================================
    # Notifications
    # =========================================================================

    def notify(self, endpoint_id: EndpointId, notification: WebhookNotification) -> None:
        """
        Send a notification to a verified endpoint.

        Topic and body may be empty.
        """
        self.delivery.deliver(coerce_endpoint_id(endpoint_id), notification)

    def last_notification_sent(self, endpoint_id: EndpointId) -> WebhookNotification:
        """The most recent notification delivered to the endpoint."""
        record = self.store.find_latest_by_foreign_key(coerce_endpoint_id(endpoint_id))
        return WebhookNotification.from_record(record)

    def close(self) -> None:
        """Close the service and cleanup resources it created."""
        if self._owns_transport:
            self.transport.close()
        if self._owned_database is not None:
            self._owned_database.dispose()
            self._owned_database = None
