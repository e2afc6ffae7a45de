"""Checkout session and payment intent creation.

Amounts are always recomputed here from the spot selection; totals sent by
the browser are only compared and logged. Booking facts travel to Stripe
as session metadata because there is no local booking store; the webhook
reads them back.
"""

import logging
from datetime import date

from umrah_booking.config import Settings
from umrah_booking.core.exceptions import (
    ConfigurationError,
    ExternalServiceError,
    NotFoundError,
    PackageNotBookable,
    ValidationError,
)
from umrah_booking.domain.packages import PackageOffering, get_package
from umrah_booking.domain.pricing import (
    BookingQuote,
    FeeSchedule,
    PaymentMethod,
    calculate_quote,
)
from umrah_booking.gateways.base import CheckoutSessionParams, LineItem, PaymentGateway
from umrah_booking.schemas.booking import SpotsPayload
from umrah_booking.schemas.payment import (
    CheckoutRequest,
    CheckoutSessionResponse,
    PaymentIntentRequest,
    PaymentIntentResponse,
)
from umrah_booking.utils.validators import is_valid_email, metadata_value

logger = logging.getLogger(__name__)

CHECKOUT_FAILED_MESSAGE = (
    "Failed to create checkout session. Please try again or contact support."
)
INTENT_FAILED_MESSAGE = "Failed to create payment intent. Please try again or contact support."

PAYMENT_METHOD_TYPES: dict[PaymentMethod, list[str]] = {
    PaymentMethod.STRIPE: ["card", "link"],
    PaymentMethod.BANK_TRANSFER: ["card", "us_bank_account", "link"],
}

SHIPPING_COUNTRIES = [
    "US", "CA", "GB", "AU", "DE", "FR", "IT", "ES", "NL", "BE", "CH",
    "AT", "SE", "NO", "DK", "FI", "IE", "PT", "LU", "MT", "CY", "EE",
    "LV", "LT", "SI", "SK", "CZ", "HU", "PL", "RO", "BG", "HR", "GR",
]


def _bookable_package(package_id: str) -> PackageOffering:
    package = get_package(package_id)
    if package is None:
        raise NotFoundError("Package", package_id)
    if not package.is_bookable:
        raise PackageNotBookable(f"{package.name} is not open for booking")
    return package


def _require_spots(spots: SpotsPayload) -> None:
    if spots.total == 0:
        raise ValidationError("Please select at least one room spot")


def build_booking_metadata(
    request: CheckoutRequest,
    package: PackageOffering,
    quote: BookingQuote,
) -> dict[str, str]:
    """Booking facts stored on the checkout session, all as strings."""
    buyer = request.buyer_info
    metadata = {
        "packageName": package.name,
        "packageId": package.id,
        "dualSpots": quote.spots["dual"],
        "tripleSpots": quote.spots["triple"],
        "quadSpots": quote.spots["quad"],
        "totalSpots": quote.participant_count,
        "participantCount": quote.participant_count,
        "participantNames": ", ".join(p.full_name for p in request.participants),
        "buyerName": f"{buyer.first_name} {buyer.last_name}".strip(),
        "buyerEmail": buyer.email,
        "buyerPhone": buyer.phone,
        "installmentDates": ",".join(i.due_date.isoformat() for i in quote.installments),
        "installmentAmounts": ",".join(str(i.amount) for i in quote.installments),
        "totalPackagePrice": quote.total_package_price,
        "totalAmount": quote.total_due_today,
        "depositAmount": quote.total_deposit,
        "processingFee": quote.processing_fee,
        "remainingAmount": quote.remaining_balance,
        "paymentType": "deposit_only",
        "paymentMethod": quote.payment_method.value,
    }
    return {key: metadata_value(value) for key, value in metadata.items()}


def build_line_items(package: PackageOffering, quote: BookingQuote) -> list[LineItem]:
    """Deposit plus processing fee. Installments are billed separately."""
    people = "person" if quote.participant_count == 1 else "people"
    method = "bank transfer" if quote.payment_method == PaymentMethod.BANK_TRANSFER else "card payment"
    return [
        LineItem(
            name=f"{package.name} - Deposit",
            description=(
                f"Deposit for {quote.participant_count} {people}. "
                "Installments will be sent separately."
            ),
            unit_amount=quote.total_deposit,
        ),
        LineItem(
            name="Processing Fee",
            description=f"Stripe processing fee for {method}",
            unit_amount=quote.processing_fee,
        ),
    ]


class CheckoutService:
    """Creates Stripe checkout sessions and payment intents for bookings."""

    def __init__(self, gateway: PaymentGateway, settings: Settings):
        self.gateway = gateway
        self.settings = settings
        self.fees = FeeSchedule.from_settings(settings)

    def _ensure_configured(self) -> None:
        if not self.gateway.is_configured:
            raise ConfigurationError("Stripe is not properly configured")

    async def create_checkout_session(
        self,
        request: CheckoutRequest,
        today: date | None = None,
    ) -> CheckoutSessionResponse:
        """Open a hosted checkout for the booking deposit."""
        self._ensure_configured()

        buyer_email = request.buyer_info.email
        if not is_valid_email(buyer_email):
            logger.warning(f"Rejected checkout with invalid email: {buyer_email!r}")
            raise ValidationError("Valid email address is required")

        _require_spots(request.spots)
        package = _bookable_package(request.package_id)
        quote = calculate_quote(
            request.spots.to_domain(),
            request.payment_method,
            prices=package.room_prices,
            fees=self.fees,
            today=today,
        )

        if request.total_amount is not None and request.total_amount != quote.total_package_price:
            logger.warning(
                f"Client total {request.total_amount} differs from server total "
                f"{quote.total_package_price} for package {package.id}; using server total"
            )
        if request.participant_count is not None and request.participant_count != quote.participant_count:
            logger.warning(
                f"Client participant count {request.participant_count} differs from "
                f"{quote.participant_count} spots"
            )

        logger.info(
            f"Creating checkout session: package={package.id} spots={quote.participant_count} "
            f"method={quote.payment_method.value} due_today={quote.total_due_today}"
        )

        result = await self.gateway.create_checkout_session(
            CheckoutSessionParams(
                line_items=build_line_items(package, quote),
                currency=self.settings.currency,
                customer_email=buyer_email,
                success_url=f"{self.settings.stripe_success_url}?session_id={{CHECKOUT_SESSION_ID}}",
                cancel_url=self.settings.stripe_cancel_url,
                payment_method_types=PAYMENT_METHOD_TYPES[quote.payment_method],
                metadata=build_booking_metadata(request, package, quote),
                shipping_countries=SHIPPING_COUNTRIES,
            )
        )
        if not result.success or not result.session_id or not result.url:
            logger.error(f"Checkout session creation failed: {result.error_message}")
            raise ExternalServiceError("stripe", CHECKOUT_FAILED_MESSAGE)

        logger.info(f"Checkout session created: {result.session_id}")
        return CheckoutSessionResponse(session_id=result.session_id, url=result.url)

    async def create_payment_intent(
        self,
        request: PaymentIntentRequest,
        today: date | None = None,
    ) -> PaymentIntentResponse:
        """Create a payment intent for today's deposit plus fee."""
        self._ensure_configured()
        _require_spots(request.spots)
        package = _bookable_package(request.package_id)
        quote = calculate_quote(
            request.spots.to_domain(),
            request.payment_method,
            prices=package.room_prices,
            fees=self.fees,
            today=today,
        )

        metadata = {key: metadata_value(value) for key, value in request.metadata.items()}
        metadata.update(
            {
                "packageId": package.id,
                "participantCount": str(quote.participant_count),
                "depositAmount": str(quote.total_deposit),
                "processingFee": str(quote.processing_fee),
                "paymentType": "deposit_only",
                "paymentMethod": quote.payment_method.value,
            }
        )

        result = await self.gateway.create_payment_intent(
            amount=quote.total_due_today,
            currency=request.currency or self.settings.currency,
            description=f"{package.name} - Deposit",
            metadata=metadata,
        )
        if not result.success or not result.client_secret or not result.intent_id:
            logger.error(f"Payment intent creation failed: {result.error_message}")
            raise ExternalServiceError("stripe", INTENT_FAILED_MESSAGE)

        logger.info(f"Payment intent created: {result.intent_id}")
        return PaymentIntentResponse(
            client_secret=result.client_secret,
            payment_intent_id=result.intent_id,
            amount=quote.total_due_today,
        )
