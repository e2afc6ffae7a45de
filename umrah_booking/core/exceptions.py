"""Custom application exceptions."""

from typing import Any

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

    def __init__(self, detail: str = "Validation failed", errors: list[Any] | None = None) -> None:
        self.errors = errors
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NotFoundError(AppException):
    """Resource not found exception."""

    def __init__(self, resource: str = "Resource", identifier: str | None = None) -> None:
        detail = f"{resource} not found"
        if identifier:
            detail = f"{resource} with ID '{identifier}' not found"
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class PackageNotBookable(AppException):
    """Package is sold out or only taking inquiries."""

    def __init__(self, detail: str = "This package is not open for booking") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ConfigurationError(AppException):
    """A required integration is not configured."""

    def __init__(self, detail: str = "Service is not properly configured") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class WebhookSignatureError(AppException):
    """Webhook payload or signature rejected."""

    def __init__(self, detail: str = "Invalid signature") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class WebhookProcessingError(AppException):
    """A verified webhook event failed in its handler."""

    def __init__(self, detail: str = "Webhook processing failed") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class InquiryStorageError(AppException):
    """Inquiry files could not be written or read."""

    def __init__(self, detail: str = "Failed to save inquiry") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class ExternalServiceError(AppException):
    """External service error."""

    def __init__(self, service: str, detail: str | None = None) -> None:
        self.service = service
        message = f"External service '{service}' is unavailable"
        if detail:
            message = detail
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=message)
