"""Custom application exceptions."""

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base application exception."""

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class ValidationError(AppException):
    """Validation error exception."""

    def __init__(self, detail: str = "Validation failed") -> None:
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


class ExternalServiceError(AppException):
    """External service error."""

    def __init__(self, service: str, detail: str | None = None) -> None:
        message = f"External service '{service}' is unavailable"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=message)


class GatewayError(Exception):
    """Base for payment gateway faults.

    These never escape a public payment operation; they are converted into
    failure responses or callback outcomes at the boundary that catches them.
    """

    reason = "failed"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(GatewayError):
    """Provider credentials are absent, so no adapter exists."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"{provider} not configured")


class TransportError(GatewayError):
    """The backend call failed, timed out or returned an unusable reply."""

    def __init__(self, operation: str, detail: str | None = None) -> None:
        self.operation = operation
        super().__init__(detail or f"Backend call '{operation}' failed")


class CallbackValidationError(GatewayError):
    """A provider redirect is missing a parameter it must carry."""

    reason = "invalid_callback"


class VerificationFailure(GatewayError):
    """The backend reported the payment as unconfirmed."""

    reason = "verification_failed"


class UnsupportedOperation(GatewayError):
    """The method offers no standalone path for the requested operation."""

    def __init__(self, operation: str, method: str) -> None:
        self.operation = operation
        self.method = method
        super().__init__(f"{operation.capitalize()} not supported for this method")
