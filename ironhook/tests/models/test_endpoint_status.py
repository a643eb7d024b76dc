"""Tests for the endpoint status lifecycle."""

from uuid import uuid4

import pytest

from ironhook.models.webhook_endpoint import (
    ALLOWED_TRANSITIONS,
    EndpointStatus,
    WebhookEndpointRecord,
    can_transition,
)
from ironhook.utils.errors import InvalidStatusTransitionError


def make_record(status: EndpointStatus) -> WebhookEndpointRecord:
    return WebhookEndpointRecord(uuid=uuid4(), url="http://example.com", status=status)


class TestEndpointStatus:
    """Tests for EndpointStatus."""

    @pytest.mark.parametrize("status,activated", [
        (EndpointStatus.UNVERIFIED, False),
        (EndpointStatus.SUSPENDED, False),
        (EndpointStatus.VERIFIED, True),
        (EndpointStatus.HEALTHY, True),
    ])
    def test_is_activated(self, status, activated):
        assert status.is_activated is activated

    def test_every_status_has_transitions(self):
        assert set(ALLOWED_TRANSITIONS) == set(EndpointStatus)

    def test_any_status_can_drop_to_unverified(self):
        """Test that a URL change is possible from every status."""
        for status in EndpointStatus:
            assert can_transition(status, EndpointStatus.UNVERIFIED)

    def test_only_unverified_and_suspended_can_be_verified(self):
        assert can_transition(EndpointStatus.UNVERIFIED, EndpointStatus.VERIFIED)
        assert can_transition(EndpointStatus.SUSPENDED, EndpointStatus.VERIFIED)
        assert not can_transition(EndpointStatus.VERIFIED, EndpointStatus.VERIFIED)
        assert not can_transition(EndpointStatus.HEALTHY, EndpointStatus.VERIFIED)

    def test_no_transition_into_suspended_or_healthy(self):
        for status in EndpointStatus:
            assert not can_transition(status, EndpointStatus.SUSPENDED)
            assert not can_transition(status, EndpointStatus.HEALTHY)


class TestRecordTransitions:
    """Tests for WebhookEndpointRecord.transition_to."""

    def test_transition_updates_status(self):
        record = make_record(EndpointStatus.UNVERIFIED)

        record.transition_to(EndpointStatus.VERIFIED)

        assert record.status == EndpointStatus.VERIFIED

    def test_disallowed_transition_raises(self):
        record = make_record(EndpointStatus.UNVERIFIED)

        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            record.transition_to(EndpointStatus.HEALTHY)

        assert record.status == EndpointStatus.UNVERIFIED
        assert exc_info.value.details["from"] == "unverified"
        assert exc_info.value.details["to"] == "healthy"
