"""Base payment gateway interface.

All gateway adapters must implement this interface.
Business logic should NOT live in adapters - only gateway communication.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class GatewayType(str, Enum):
    """Supported payment gateways."""

    STRIPE = "stripe"
    UNCONFIGURED = "unconfigured"


@dataclass
class LineItem:
    """One priced line on a hosted checkout page."""

    name: str
    description: str
    unit_amount: int
    quantity: int = 1


@dataclass
class CheckoutSessionResult:
    """Result of creating a hosted checkout session."""

    success: bool
    session_id: str | None = None
    url: str | None = None
    error_message: str | None = None


@dataclass
class PaymentIntentResult:
    """Result of creating a payment intent."""

    success: bool
    intent_id: str | None = None
    client_secret: str | None = None
    amount: int | None = None
    error_message: str | None = None


@dataclass
class CheckoutSessionParams:
    """Everything the gateway needs to open a hosted checkout."""

    line_items: list[LineItem]
    currency: str
    customer_email: str
    success_url: str
    cancel_url: str
    payment_method_types: list[str]
    metadata: dict[str, str] = field(default_factory=dict)
    shipping_countries: list[str] = field(default_factory=list)


class PaymentGateway(ABC):
    """Abstract base class for payment gateways."""

    @property
    @abstractmethod
    def gateway_type(self) -> GatewayType:
        """Return the gateway type."""
        pass

    @property
    def is_configured(self) -> bool:
        return True

    @property
    def publishable_key(self) -> str | None:
        return None

    @abstractmethod
    async def create_checkout_session(self, params: CheckoutSessionParams) -> CheckoutSessionResult:
        """Create a hosted checkout session.

        Args:
            params: Line items, redirect URLs and metadata

        Returns:
            CheckoutSessionResult with the session id and redirect URL
        """
        pass

    @abstractmethod
    async def create_payment_intent(
        self,
        amount: int,
        currency: str,
        description: str,
        metadata: dict[str, str] | None = None,
    ) -> PaymentIntentResult:
        """Create a payment intent for an embedded payment form.

        Args:
            amount: Amount in smallest currency unit (cents)
            currency: Currency code
            description: Payment description
            metadata: Opaque key/value strings stored with the intent

        Returns:
            PaymentIntentResult with the client secret
        """
        pass

    @abstractmethod
    def construct_event(self, payload: bytes, signature: str | None) -> Mapping[str, Any]:
        """Verify a webhook signature and parse the event.

        Args:
            payload: Raw request body
            signature: Webhook signature header

        Returns:
            The parsed event

        Raises:
            WebhookSignatureError: If the payload or signature is invalid
            ConfigurationError: If no signing secret is configured
        """
        pass
