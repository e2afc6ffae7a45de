"""Webhook endpoints for payment gateways."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request, status

from umrah_booking.api.deps import ERROR_RESPONSES, get_webhook_dispatcher
from umrah_booking.schemas.payment import WebhookAck
from umrah_booking.services.webhook_service import WebhookDispatcher

router = APIRouter(responses=ERROR_RESPONSES)


@router.post("/stripe", response_model=WebhookAck, status_code=status.HTTP_200_OK)
async def stripe_webhook(
    request: Request,
    dispatcher: Annotated[WebhookDispatcher, Depends(get_webhook_dispatcher)],
    stripe_signature: str | None = Header(None, alias="Stripe-Signature"),
) -> WebhookAck:
    """Handle Stripe webhook events."""
    # Raw body; the signature covers the exact bytes
    payload = await request.body()
    await dispatcher.handle(payload, stripe_signature)
    return WebhookAck()
