"""Stripe payment gateway adapter."""

import json
import logging
from collections.abc import Mapping
from typing import Any

import stripe

from umrah_booking.core.exceptions import ConfigurationError, WebhookSignatureError
from umrah_booking.gateways.base import (
    CheckoutSessionParams,
    CheckoutSessionResult,
    GatewayType,
    PaymentGateway,
    PaymentIntentResult,
)

logger = logging.getLogger(__name__)


class StripeGateway(PaymentGateway):
    """Stripe payment gateway implementation.

    Keys are passed per request instead of being set on the ``stripe``
    module, so several gateways can coexist in one process.
    """

    def __init__(
        self,
        secret_key: str,
        webhook_secret: str | None = None,
        publishable_key: str | None = None,
    ):
        self.secret_key = secret_key
        self.webhook_secret = webhook_secret
        self._publishable_key = publishable_key

    @property
    def gateway_type(self) -> GatewayType:
        return GatewayType.STRIPE

    @property
    def publishable_key(self) -> str | None:
        return self._publishable_key

    async def create_checkout_session(self, params: CheckoutSessionParams) -> CheckoutSessionResult:
        """Create Stripe Checkout session."""
        try:
            session = stripe.checkout.Session.create(
                api_key=self.secret_key,
                mode="payment",
                payment_method_types=params.payment_method_types,
                line_items=[
                    {
                        "price_data": {
                            "currency": params.currency,
                            "product_data": {
                                "name": item.name,
                                "description": item.description,
                            },
                            "unit_amount": item.unit_amount,
                        },
                        "quantity": item.quantity,
                    }
                    for item in params.line_items
                ],
                success_url=params.success_url,
                cancel_url=params.cancel_url,
                customer_email=params.customer_email,
                metadata=params.metadata,
                billing_address_collection="required",
                shipping_address_collection={"allowed_countries": params.shipping_countries},
            )

            return CheckoutSessionResult(success=True, session_id=session.id, url=session.url)

        except stripe.StripeError as e:
            logger.exception("Stripe checkout session creation failed")
            return CheckoutSessionResult(success=False, error_message=str(e))

    async def create_payment_intent(
        self,
        amount: int,
        currency: str,
        description: str,
        metadata: dict[str, str] | None = None,
    ) -> PaymentIntentResult:
        """Create Stripe PaymentIntent."""
        try:
            intent = stripe.PaymentIntent.create(
                api_key=self.secret_key,
                amount=amount,
                currency=currency.lower(),
                description=description,
                metadata=metadata or {},
                automatic_payment_methods={"enabled": True},
            )

            return PaymentIntentResult(
                success=True,
                intent_id=intent.id,
                client_secret=intent.client_secret,
                amount=intent.amount,
            )

        except stripe.StripeError as e:
            logger.exception("Stripe payment intent creation failed")
            return PaymentIntentResult(success=False, error_message=str(e))

    def construct_event(self, payload: bytes, signature: str | None) -> Mapping[str, Any]:
        """Verify Stripe webhook signature and parse the event as plain JSON."""
        if not self.webhook_secret:
            raise ConfigurationError("Stripe webhook secret is not configured")
        if not signature:
            raise WebhookSignatureError("Missing Stripe-Signature header")

        try:
            body = payload.decode("utf-8")
            stripe.WebhookSignature.verify_header(
                body, signature, self.webhook_secret, tolerance=stripe.Webhook.DEFAULT_TOLERANCE
            )
            return json.loads(body)
        except ValueError:
            raise WebhookSignatureError("Invalid payload")
        except stripe.SignatureVerificationError:
            raise WebhookSignatureError("Invalid signature")
