"""API dependencies.

Long-lived collaborators are created once by ``create_application`` and
kept on ``app.state``; these helpers hand them to route handlers.
"""

from typing import Annotated

from fastapi import Depends, Request

from umrah_booking.config import Settings
from umrah_booking.core.idempotency import ProcessedEventStore
from umrah_booking.gateways.base import PaymentGateway
from umrah_booking.schemas.common import ErrorResponse
from umrah_booking.services.checkout_service import CheckoutService
from umrah_booking.services.inquiry_service import InquiryStore
from umrah_booking.services.webhook_service import WebhookDispatcher

# OpenAPI documentation for the shared error body
ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gateway(request: Request) -> PaymentGateway:
    return request.app.state.gateway


def get_event_store(request: Request) -> ProcessedEventStore:
    return request.app.state.event_store


def get_inquiry_store(request: Request) -> InquiryStore:
    return request.app.state.inquiry_store


def get_checkout_service(
    gateway: Annotated[PaymentGateway, Depends(get_gateway)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> CheckoutService:
    return CheckoutService(gateway, settings)


def get_webhook_dispatcher(
    gateway: Annotated[PaymentGateway, Depends(get_gateway)],
    event_store: Annotated[ProcessedEventStore, Depends(get_event_store)],
) -> WebhookDispatcher:
    return WebhookDispatcher(gateway, event_store)
