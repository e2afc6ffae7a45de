"""Payment endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from umrah_booking.api.deps import (
    ERROR_RESPONSES,
    get_app_settings,
    get_checkout_service,
    get_gateway,
)
from umrah_booking.config import Settings
from umrah_booking.gateways.base import PaymentGateway
from umrah_booking.schemas.payment import (
    CheckoutRequest,
    CheckoutSessionResponse,
    PaymentConfigResponse,
    PaymentIntentRequest,
    PaymentIntentResponse,
)
from umrah_booking.services.checkout_service import CheckoutService

router = APIRouter(responses=ERROR_RESPONSES)


@router.post("/checkout-session", response_model=CheckoutSessionResponse, response_model_by_alias=True)
async def create_checkout_session(
    request: CheckoutRequest,
    service: Annotated[CheckoutService, Depends(get_checkout_service)],
) -> CheckoutSessionResponse:
    """Create a Stripe Checkout session for the booking deposit."""
    return await service.create_checkout_session(request)


@router.post("/intent", response_model=PaymentIntentResponse, response_model_by_alias=True)
async def create_payment_intent(
    request: PaymentIntentRequest,
    service: Annotated[CheckoutService, Depends(get_checkout_service)],
) -> PaymentIntentResponse:
    """Create a payment intent for the embedded payment form."""
    return await service.create_payment_intent(request)


@router.get("/config", response_model=PaymentConfigResponse, response_model_by_alias=True)
async def payment_config(
    gateway: Annotated[PaymentGateway, Depends(get_gateway)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> PaymentConfigResponse:
    """Publishable key for the browser; never the secret key."""
    return PaymentConfigResponse(publishable_key=gateway.publishable_key, currency=settings.currency)
