"""Tests for endpoint verification."""

from unittest.mock import MagicMock
from uuid import uuid4

import httpx
import pytest

from ironhook.models.webhook_endpoint import EndpointStatus, WebhookEndpointRecord
from ironhook.services.endpoint_verification_service import (
    EndpointVerificationService,
    check_verification_response,
)
from ironhook.utils.errors import NotFoundError, VerificationFailedError


@pytest.fixture
def endpoint_record():
    return WebhookEndpointRecord(
        id=1,
        uuid=uuid4(),
        url="https://webhooks.example.com/",
        status=EndpointStatus.UNVERIFIED,
    )


@pytest.fixture
def mock_store(endpoint_record):
    store = MagicMock()
    store.find_by_id.return_value = endpoint_record
    store.save.side_effect = lambda record: record
    return store


@pytest.fixture
def mock_transport(endpoint_record):
    transport = MagicMock()
    transport.send.return_value = httpx.Response(200, content=str(endpoint_record.uuid).encode())
    return transport


@pytest.fixture
def verifier(mock_store, mock_transport):
    return EndpointVerificationService(mock_store, mock_transport)


# =============================================================================
# Response Check Tests
# =============================================================================

class TestCheckVerificationResponse:
    """Test cases for the echo comparison."""

    @pytest.mark.parametrize("body,expected", [
        (b"abcd", "abcd"),
        (b"6551e000-947a-40a4-948d-18d01e3660d4", "6551e000-947a-40a4-948d-18d01e3660d4"),
    ])
    def test_matching_body(self, body, expected):
        check_verification_response(body, expected)

    @pytest.mark.parametrize("body,expected", [
        (b"", "abcd"),
        (b"6551e000-947a-40a4-948d-18d01e3660d5", "6551e000-947a-40a4-948d-18d01e3660d4"),
        (b"abcd\n", "abcd"),
        (b" abcd", "abcd"),
        (b"ABCD", "abcd"),
    ])
    def test_mismatching_body(self, body, expected):
        """Test that the body has to match exactly, without trimming."""
        with pytest.raises(VerificationFailedError):
            check_verification_response(body, expected)


# =============================================================================
# Verification Tests
# =============================================================================

class TestEndpointVerificationService:
    """Test cases for EndpointVerificationService.verify."""

    def test_successful_verification(self, verifier, endpoint_record, mock_store, mock_transport):
        endpoint = verifier.verify(endpoint_record.uuid)

        assert endpoint.status == EndpointStatus.VERIFIED
        assert endpoint.id == endpoint_record.uuid
        mock_transport.send.assert_called_once_with(
            "GET",
            f"https://webhooks.example.com/verification?id={endpoint_record.uuid}",
        )
        mock_store.save.assert_called_once_with(endpoint_record)

    def test_suspended_endpoint_can_be_verified(self, verifier, endpoint_record):
        endpoint_record.status = EndpointStatus.SUSPENDED

        assert verifier.verify(endpoint_record.uuid).status == EndpointStatus.VERIFIED

    @pytest.mark.parametrize("status", [EndpointStatus.VERIFIED, EndpointStatus.HEALTHY])
    def test_activated_endpoint_short_circuits(self, verifier, endpoint_record, mock_store, mock_transport, status):
        """Test that already verified endpoints aren't contacted again."""
        endpoint_record.status = status

        endpoint = verifier.verify(endpoint_record.uuid)

        assert endpoint.status == status
        mock_transport.send.assert_not_called()
        mock_store.save.assert_not_called()

    def test_wrong_echo_fails(self, verifier, endpoint_record, mock_store, mock_transport):
        mock_transport.send.return_value = httpx.Response(200, text="Url Param 'id' is missing")

        with pytest.raises(VerificationFailedError):
            verifier.verify(endpoint_record.uuid)

        assert endpoint_record.status == EndpointStatus.UNVERIFIED
        mock_store.save.assert_not_called()

    def test_status_code_is_not_consulted(self, verifier, endpoint_record, mock_transport):
        mock_transport.send.return_value = httpx.Response(404, content=str(endpoint_record.uuid).encode())

        assert verifier.verify(endpoint_record.uuid).status == EndpointStatus.VERIFIED

    @pytest.mark.parametrize("error", [
        httpx.ConnectError("connection refused"),
        httpx.ReadTimeout("timed out"),
        httpx.ReadError("connection reset"),
        httpx.InvalidURL("Invalid IPv6 address"),
    ])
    def test_transport_error_fails(self, verifier, endpoint_record, mock_store, mock_transport, error):
        mock_transport.send.side_effect = error

        with pytest.raises(VerificationFailedError) as exc_info:
            verifier.verify(endpoint_record.uuid)

        assert exc_info.value.__cause__ is error
        mock_store.save.assert_not_called()

    def test_missing_endpoint(self, verifier, mock_store, mock_transport):
        mock_store.find_by_id.side_effect = NotFoundError()

        with pytest.raises(NotFoundError):
            verifier.verify(uuid4())

        mock_transport.send.assert_not_called()
