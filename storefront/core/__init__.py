"""Core utilities: exceptions and middleware."""

from storefront.core.exceptions import (
    AppException,
    CallbackValidationError,
    ConfigurationError,
    ExternalServiceError,
    GatewayError,
    TransportError,
    UnsupportedOperation,
    ValidationError,
    VerificationFailure,
)

__all__ = [
    "AppException",
    "CallbackValidationError",
    "ConfigurationError",
    "ExternalServiceError",
    "GatewayError",
    "TransportError",
    "UnsupportedOperation",
    "ValidationError",
    "VerificationFailure",
]
