"""Challenge-response verification of webhook endpoints."""

import logging
from uuid import UUID

import httpx

from ironhook.database.record_store import RecordStore
from ironhook.infrastructure.webhooks.transport import WebhookTransport
from ironhook.models.webhook_endpoint import EndpointStatus
from ironhook.schemas.webhook import WebhookEndpoint
from ironhook.utils.errors import VerificationFailedError
from ironhook.utils.url_policy import build_verification_url

logger = logging.getLogger(__name__)


def check_verification_response(body: bytes, expected_id: str) -> None:
    """
    Check that a verification response echoes the endpoint id.

    The body has to match the id exactly, byte for byte.
    """
    if body != expected_id.encode("utf-8"):
        raise VerificationFailedError(
            message="Expected a different endpoint verification response",
            details={"expected": expected_id, "received": body[:100].decode("utf-8", "replace")},
        )


class EndpointVerificationService:
    """
    Verifies a caller's control over a registered endpoint.

    Given an endpoint at <url>, the service requests

        GET <url>/verification?id=<endpoint id>

    and expects the response body to be exactly the endpoint id.
    Only verified endpoints receive notifications.
    """

    def __init__(self, store: RecordStore, transport: WebhookTransport):
        self.store = store
        self.transport = transport

    def verify(self, endpoint_id: UUID) -> WebhookEndpoint:
        record = self.store.find_by_id(endpoint_id)

        if record.status.is_activated:
            logger.info(f"Endpoint {endpoint_id} already verified")
            return WebhookEndpoint.from_record(record)

        expected_id = str(record.uuid)
        url = build_verification_url(record.url, expected_id)

        try:
            response = self.transport.send("GET", url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Failed endpoint verification for {endpoint_id}: {e}")
            raise VerificationFailedError(
                message="Couldn't reach the endpoint for verification",
                details={"uuid": expected_id, "reason": str(e)},
            ) from e

        try:
            check_verification_response(response.content, expected_id)
        except VerificationFailedError as e:
            logger.warning(f"Failed endpoint verification for {endpoint_id}: {e.message}")
            raise

        record.transition_to(EndpointStatus.VERIFIED)
        record = self.store.save(record)

        logger.info(f"Successfully verified endpoint {endpoint_id}")
        return WebhookEndpoint.from_record(record)
