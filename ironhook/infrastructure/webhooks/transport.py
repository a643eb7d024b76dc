"""
Webhook HTTP Transport

Outbound HTTP for endpoint verification challenges and notification
delivery. Every request is bounded by the transport's timeout.
"""

import logging
from abc import ABC, abstractmethod
from typing import Mapping, Optional

import httpx

logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT_SECONDS = 3.0
USER_AGENT = "ironhook/1.0"


class WebhookTransport(ABC):
    """
    Sends a single HTTP request and returns the full response.

    Implementations raise httpx.HTTPError subclasses when the request
    can't be sent or no response arrives in time.
    """

    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @abstractmethod
    def send(
        self,
        method: str,
        url: str,
        content: Optional[bytes] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> httpx.Response:
        pass

    def close(self) -> None:
        """Release any held connections."""
        pass


class HttpxWebhookTransport(WebhookTransport):
    """
    Transport backed by a synchronous httpx client.

    Pass a preconfigured client (for example one built on
    httpx.MockTransport) to control where requests go; the timeout
    is applied per request either way.
    """

    def __init__(
        self,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.Client] = None,
    ):
        self.timeout_seconds = timeout_seconds
        self._owns_client = client is None
        self._http_client = client

    def get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.Client(
                timeout=self.timeout_seconds,
                follow_redirects=False,
                headers={"User-Agent": USER_AGENT},
            )
            self._owns_client = True
        return self._http_client

    def send(
        self,
        method: str,
        url: str,
        content: Optional[bytes] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> httpx.Response:
        client = self.get_client()
        logger.debug(f"Sending {method} {url}")
        return client.request(
            method,
            url,
            content=content,
            headers=dict(headers or {}),
            timeout=self.timeout_seconds,
        )

    def close(self) -> None:
        """Close HTTP client if this transport created it."""
        if self._http_client is not None and self._owns_client:
            self._http_client.close()
            self._http_client = None
