"""Stripe webhook event kinds handled by the site."""

from enum import Enum


class WebhookEventKind(str, Enum):
    """Recognized Stripe event types, plus a catch-all."""

    CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"
    PAYMENT_INTENT_SUCCEEDED = "payment_intent.succeeded"
    PAYMENT_INTENT_FAILED = "payment_intent.payment_failed"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def from_event_type(cls, event_type: str | None) -> "WebhookEventKind":
        if event_type == cls.UNRECOGNIZED.value:
            return cls.UNRECOGNIZED
        try:
            return cls(event_type)
        except ValueError:
            return cls.UNRECOGNIZED
