"""Custom exception classes for webhook endpoint management."""

from typing import Any, Dict, Optional


class WebhookError(Exception):
    """Base exception for webhook errors."""

    error_code: str = "internal_error"
    message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.__class__.message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging or responses."""
        result: Dict[str, Any] = {
            "error": {
                "message": self.message,
                "code": self.error_code,
            }
        }

        if self.details:
            result["error"]["details"] = self.details

        return result


# =============================================================================
# Validation
# =============================================================================

class ValidationError(WebhookError):
    """Exception for caller input that cannot be accepted."""

    error_code: str = "validation_error"
    message: str = "Input validation failed"


class EmptyURLError(ValidationError):
    """The endpoint URL is empty."""

    error_code: str = "empty_url"
    message: str = (
        "Can't accept an empty URL in an endpoint declaration. "
        "Recover by retrying with a non-empty URL"
    )


class MissingSchemeError(ValidationError):
    """The endpoint URL is not absolute."""

    error_code: str = "missing_scheme"
    message: str = (
        "Can't accept a URL without http/s. "
        "Recover by retrying with \"https://\" + endpoint"
    )


class UnsupportedSchemeError(ValidationError):
    """The endpoint URL uses a scheme other than http or https."""

    error_code: str = "unsupported_scheme"
    message: str = "Can't accept a URL with a scheme other than http/s"


class EmptyHostError(ValidationError):
    """The endpoint URL has a valid scheme but no host."""

    error_code: str = "empty_host"
    message: str = "Can't accept a URL without a host"


class MalformedURLError(ValidationError):
    """The endpoint URL has characters or components that can't be requested."""

    error_code: str = "malformed_url"
    message: str = "Can't accept a URL like this for an endpoint"


class MissingIDError(ValidationError):
    """No endpoint identifier was supplied."""

    error_code: str = "missing_id"
    message: str = (
        "Can't accept an empty endpoint id. "
        "Recover by retrying with the id returned on creation"
    )


class InvalidIDError(ValidationError):
    """The endpoint identifier is not a UUID."""

    error_code: str = "invalid_id"
    message: str = "Endpoint id must be a UUID"


# =============================================================================
# Lookup
# =============================================================================

class NotFoundError(WebhookError):
    """Exception for a record that does not exist."""

    error_code: str = "not_found"
    message: str = (
        "Can't find the requested record. "
        "Recover by retrying with a different identifier"
    )


class DuplicateEndpointError(WebhookError):
    """Exception for an endpoint id that is already registered."""

    error_code: str = "duplicate"
    message: str = "Endpoint already exists"


# =============================================================================
# Lifecycle
# =============================================================================

class VerificationFailedError(WebhookError):
    """The endpoint did not echo the verification challenge."""

    error_code: str = "verification_failed"
    message: str = "Failed to verify an endpoint"


class NotActivatedError(WebhookError):
    """The endpoint has to be verified before notifications are sent."""

    error_code: str = "not_activated"
    message: str = (
        "The endpoint you're trying to notify hasn't been activated yet. "
        "Recover by verifying the endpoint first"
    )


class InvalidStatusTransitionError(WebhookError):
    """A status change not allowed by the endpoint lifecycle."""

    error_code: str = "invalid_status_transition"
    message: str = "Endpoint status transition is not allowed"


# =============================================================================
# Delivery
# =============================================================================

class DeliveryError(WebhookError):
    """Base exception for failed notification deliveries."""

    error_code: str = "delivery_error"
    message: str = "Failed notifying the endpoint"


class DeliveryTransportError(DeliveryError):
    """The notification request could not be sent or got no response."""

    error_code: str = "delivery_transport_error"
    message: str = "Couldn't reach the endpoint"


class DeliveryRejectedError(DeliveryError):
    """The endpoint answered the notification with an HTTP error status."""

    error_code: str = "delivery_rejected"
    message: str = (
        "The endpoint you're trying to notify returned an error. "
        "Check that the request body is parsed correctly on both ends"
    )

    def __init__(
        self,
        status_code: int,
        response_body: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(
            message=message,
            details={"status_code": status_code, "response_body": response_body},
        )


# =============================================================================
# Infrastructure
# =============================================================================

class PersistenceError(WebhookError):
    """Exception for record store failures."""

    error_code: str = "database_error"
    message: str = "Database operation failed"


class ConfigurationError(WebhookError):
    """Exception for unusable settings."""

    error_code: str = "configuration_error"
    message: str = "Invalid configuration"


def create_not_found_error(resource_type: str, identifier: Any) -> NotFoundError:
    """Create a not found error for a specific resource."""
    return NotFoundError(
        message=f"{resource_type} not found",
        details={"resource_type": resource_type, "identifier": str(identifier)},
    )


def create_duplicate_error(resource_type: str, identifier: Any) -> DuplicateEndpointError:
    """Create a duplicate error for a specific resource."""
    return DuplicateEndpointError(
        message=f"{resource_type} with id '{identifier}' already exists",
        details={"resource_type": resource_type, "identifier": str(identifier)},
    )
