"""Pydantic schemas for API validation."""

from umrah_booking.schemas.booking import (
    BookingDraftPayload,
    QuoteRequest,
    QuoteResponse,
    ValidateStepRequest,
    ValidateStepResponse,
)
from umrah_booking.schemas.common import CamelModel, ErrorResponse
from umrah_booking.schemas.inquiry import (
    InquiryCreatedResponse,
    InquiryListResponse,
    InquiryRecord,
    InquirySubmission,
)
from umrah_booking.schemas.package import PackageListResponse, PackageResponse
from umrah_booking.schemas.payment import (
    CheckoutRequest,
    CheckoutSessionResponse,
    PaymentConfigResponse,
    PaymentIntentRequest,
    PaymentIntentResponse,
    WebhookAck,
)

__all__ = [
    "BookingDraftPayload",
    "CamelModel",
    "CheckoutRequest",
    "CheckoutSessionResponse",
    "ErrorResponse",
    "InquiryCreatedResponse",
    "InquiryListResponse",
    "InquiryRecord",
    "InquirySubmission",
    "PackageListResponse",
    "PackageResponse",
    "PaymentConfigResponse",
    "PaymentIntentRequest",
    "PaymentIntentResponse",
    "QuoteRequest",
    "QuoteResponse",
    "ValidateStepRequest",
    "ValidateStepResponse",
    "WebhookAck",
]
