"""Stripe webhook dispatch.

Every event is signature-checked before anything else happens. Verified
events are routed by kind; handlers currently log only, since bookings
are not persisted and confirmation emails are sent elsewhere.
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from umrah_booking.core.exceptions import (
    ConfigurationError,
    WebhookProcessingError,
    WebhookSignatureError,
)
from umrah_booking.core.idempotency import ProcessedEventStore
from umrah_booking.domain.booking_record import BookingRecord
from umrah_booking.domain.webhook_events import WebhookEventKind
from umrah_booking.gateways.base import PaymentGateway

logger = logging.getLogger(__name__)

Event = Mapping[str, Any]
EventHandler = Callable[[Event], Awaitable[None]]


async def handle_checkout_session_completed(event: Event) -> None:
    session = event["data"]["object"]
    logger.info(f"Checkout session completed: {session['id']}")
    booking = BookingRecord.from_session(session)
    logger.info(f"Booking data to save: {booking.as_log_dict()}")


async def handle_payment_intent_succeeded(event: Event) -> None:
    intent = event["data"]["object"]
    logger.info(f"Payment succeeded: {intent['id']}")


async def handle_payment_intent_failed(event: Event) -> None:
    intent = event["data"]["object"]
    error = intent.get("last_payment_error") or {}
    logger.warning(f"Payment failed: {intent['id']} ({error.get('message', 'no reason given')})")


async def handle_unrecognized(event: Event) -> None:
    logger.info(f"Unhandled event type: {event.get('type')}")


EVENT_HANDLERS: dict[WebhookEventKind, EventHandler] = {
    WebhookEventKind.CHECKOUT_SESSION_COMPLETED: handle_checkout_session_completed,
    WebhookEventKind.PAYMENT_INTENT_SUCCEEDED: handle_payment_intent_succeeded,
    WebhookEventKind.PAYMENT_INTENT_FAILED: handle_payment_intent_failed,
    WebhookEventKind.UNRECOGNIZED: handle_unrecognized,
}

_missing = set(WebhookEventKind) - set(EVENT_HANDLERS)
if _missing:
    raise RuntimeError(f"No webhook handler for: {sorted(kind.value for kind in _missing)}")


class WebhookDispatcher:
    """Verifies Stripe events and routes them to their handlers."""

    def __init__(
        self,
        gateway: PaymentGateway,
        event_store: ProcessedEventStore,
        handlers: dict[WebhookEventKind, EventHandler] | None = None,
    ):
        self.gateway = gateway
        self.event_store = event_store
        self.handlers = handlers or EVENT_HANDLERS

    async def handle(self, payload: bytes, signature: str | None) -> WebhookEventKind:
        """Verify and dispatch one delivery.

        Raises:
            WebhookSignatureError: Signature or payload rejected
            ConfigurationError: No signing secret configured
            WebhookProcessingError: A handler failed
        """
        try:
            event = self.gateway.construct_event(payload, signature)
        except WebhookSignatureError as e:
            logger.warning(f"Webhook signature verification failed: {e.detail}")
            raise
        except ConfigurationError as e:
            logger.error(f"Webhook rejected, gateway not configured: {e.detail}")
            raise
        return await self.dispatch(event)

    async def dispatch(self, event: Event) -> WebhookEventKind:
        event_id = event.get("id")
        kind = WebhookEventKind.from_event_type(event.get("type"))

        if event_id and self.event_store.is_processed(event_id):
            logger.info(f"Duplicate delivery of event {event_id} ({event.get('type')}), skipping")
            return kind

        handler = self.handlers[kind]
        try:
            await handler(event)
        except Exception as e:
            logger.exception(f"Error processing webhook event {event_id} ({event.get('type')})")
            raise WebhookProcessingError() from e

        if event_id:
            self.event_store.mark_processed(event_id, {"type": event.get("type"), "kind": kind.value})
        return kind
