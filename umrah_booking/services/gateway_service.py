"""Payment gateway construction.

The gateway is built once from Settings when the application is created
and handed to request handlers through ``app.state``.
"""

import logging

from umrah_booking.config import Settings
from umrah_booking.gateways.base import PaymentGateway
from umrah_booking.gateways.stripe_gateway import StripeGateway
from umrah_booking.gateways.unconfigured import UnconfiguredGateway

logger = logging.getLogger(__name__)


def build_payment_gateway(settings: Settings) -> PaymentGateway:
    """Create the Stripe gateway, or an unconfigured stand-in without keys."""
    if not settings.stripe_secret_key:
        logger.warning("STRIPE_SECRET_KEY is not set; payment endpoints are disabled")
        return UnconfiguredGateway(
            "Stripe is not configured. Please set STRIPE_SECRET_KEY environment variable."
        )

    if not settings.stripe_webhook_secret:
        logger.warning("STRIPE_WEBHOOK_SECRET is not set; webhooks will be rejected")

    if settings.environment == "production" and settings.stripe_secret_key.startswith("sk_test_"):
        logger.warning("Running in production with a Stripe test key")

    return StripeGateway(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
        publishable_key=settings.stripe_publishable_key,
    )
