"""Core utilities: exceptions, middleware, idempotency, logging."""

from umrah_booking.core.exceptions import (
    AppException,
    ConfigurationError,
    ExternalServiceError,
    InquiryStorageError,
    NotFoundError,
    PackageNotBookable,
    ValidationError,
    WebhookProcessingError,
    WebhookSignatureError,
)

__all__ = [
    "AppException",
    "ConfigurationError",
    "ExternalServiceError",
    "InquiryStorageError",
    "NotFoundError",
    "PackageNotBookable",
    "ValidationError",
    "WebhookProcessingError",
    "WebhookSignatureError",
]
