"""Shared fixtures: in-memory database and a mock webhook receiver."""

import json
from typing import List, Optional

import httpx
import pytest

from ironhook.config.settings import WebhookSettings
from ironhook.database.database import Database, DatabaseConfig
from ironhook.database.record_store import SqlAlchemyRecordStore
from ironhook.infrastructure.webhooks.transport import HttpxWebhookTransport
from ironhook.services.webhook_endpoint_service import WebhookEndpointService


class MockReceiver:
    """
    Webhook receiver used as an httpx.MockTransport handler.

    Echoes the id query parameter on /verification and accepts JSON
    on /notification, answering with notification_status.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.notification_status = 200
        self.verification_body: Optional[str] = None
        self.fail_with: Optional[Exception] = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.fail_with is not None:
            raise self.fail_with

        if request.url.path.endswith("/verification"):
            if self.verification_body is not None:
                return httpx.Response(200, text=self.verification_body)
            return httpx.Response(200, text=request.url.params.get("id", ""))

        if request.url.path.endswith("/notification"):
            try:
                json.loads(request.content)
            except ValueError:
                return httpx.Response(400, text="Didn't understand you, sorry")
            if self.notification_status >= 400:
                return httpx.Response(self.notification_status, text="Rejected")
            return httpx.Response(self.notification_status, text="Awesome, thanks")

        return httpx.Response(400)

    def requests_to(self, suffix: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(suffix)]


@pytest.fixture
def database():
    """Fresh in-memory SQLite database with the schema applied."""
    db = Database(DatabaseConfig())
    db.init_db()
    yield db
    db.dispose()


@pytest.fixture
def store(database):
    return SqlAlchemyRecordStore(database)


@pytest.fixture
def receiver():
    return MockReceiver()


@pytest.fixture
def transport(receiver):
    client = httpx.Client(transport=httpx.MockTransport(receiver))
    yield HttpxWebhookTransport(timeout_seconds=3.0, client=client)
    client.close()


@pytest.fixture
def settings():
    return WebhookSettings()


@pytest.fixture
def service(settings, database, transport):
    svc = WebhookEndpointService(settings=settings, database=database, transport=transport)
    yield svc
    svc.close()
