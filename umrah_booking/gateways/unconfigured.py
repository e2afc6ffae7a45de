"""Stand-in gateway used when no payment processor credentials are set."""

from collections.abc import Mapping
from typing import Any

from umrah_booking.core.exceptions import ConfigurationError
from umrah_booking.gateways.base import (
    CheckoutSessionParams,
    CheckoutSessionResult,
    GatewayType,
    PaymentGateway,
    PaymentIntentResult,
)


class UnconfiguredGateway(PaymentGateway):
    """Gateway that refuses every operation.

    Every call raises ConfigurationError so payment endpoints fail fast
    with a descriptive 500 instead of calling Stripe without credentials.
    """

    def __init__(self, reason: str = "Stripe is not properly configured"):
        self.reason = reason

    @property
    def gateway_type(self) -> GatewayType:
        return GatewayType.UNCONFIGURED

    @property
    def is_configured(self) -> bool:
        return False

    async def create_checkout_session(self, params: CheckoutSessionParams) -> CheckoutSessionResult:
        raise ConfigurationError(self.reason)

    async def create_payment_intent(
        self,
        amount: int,
        currency: str,
        description: str,
        metadata: dict[str, str] | None = None,
    ) -> PaymentIntentResult:
        raise ConfigurationError(self.reason)

    def construct_event(self, payload: bytes, signature: str | None) -> Mapping[str, Any]:
        raise ConfigurationError(self.reason)
