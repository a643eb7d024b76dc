"""Delivery of notifications to verified webhook endpoints."""

import logging
from typing import Callable
from uuid import UUID

import httpx

from ironhook.database.record_store import RecordStore
from ironhook.infrastructure.webhooks.transport import WebhookTransport
from ironhook.schemas.webhook import WebhookEndpoint, WebhookNotification
from ironhook.utils.errors import (
    DeliveryRejectedError,
    DeliveryTransportError,
    NotActivatedError,
)
from ironhook.utils.url_policy import build_notification_url

logger = logging.getLogger(__name__)


JSON_HEADERS = {"Content-Type": "application/json"}


class NotificationDeliveryService:
    """
    Sends notifications to endpoints and logs every delivery.

    A delivery is a single attempt: failures are reported to the
    caller and never retried here.
    """

    def __init__(
        self,
        fetch_endpoint: Callable[[UUID], WebhookEndpoint],
        store: RecordStore,
        transport: WebhookTransport,
        method: str = "GET",
    ):
        self.fetch_endpoint = fetch_endpoint
        self.store = store
        self.transport = transport
        self.method = method

    def deliver(self, endpoint_id: UUID, notification: WebhookNotification) -> None:
        """
        Send a notification to a verified endpoint.

        The delivery record is written as soon as the endpoint responds,
        before its status code is checked, so rejected deliveries are
        logged too.

        Raises:
            NotActivatedError: the endpoint hasn't been verified
            DeliveryTransportError: no response was received
            PersistenceError: the delivery record couldn't be written
            DeliveryRejectedError: the endpoint answered with status >= 400
        """
        # the stored status decides, not whatever the caller holds
        endpoint = self.fetch_endpoint(endpoint_id)

        if not endpoint.status.is_activated:
            raise NotActivatedError(details={"uuid": str(endpoint.id), "status": endpoint.status.value})

        payload = notification.model_dump_json().encode("utf-8")
        url = build_notification_url(endpoint.url)

        try:
            response = self.transport.send(self.method, url, content=payload, headers=JSON_HEADERS)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Couldn't deliver notification {notification.event_uuid} to {endpoint.id}: {e}")
            raise DeliveryTransportError(
                details={"uuid": str(endpoint.id), "reason": str(e)},
            ) from e

        self.store.insert(notification.to_record(endpoint.id))

        if response.status_code >= 400:
            body = response.text
            logger.warning(
                f"Notification {notification.event_uuid} to {endpoint.id} returned "
                f"HTTP {response.status_code}: {body[:500]}"
            )
            raise DeliveryRejectedError(status_code=response.status_code, response_body=body)

        logger.info(f"Delivered notification {notification.event_uuid} to {endpoint.id}")
