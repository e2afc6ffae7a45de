"""Six-step booking wizard.

Steps: 1 package & participants, 2 buyer info, 3 payment method,
4 terms, 5 payment, 6 summary. The wizard only moves one step at a
time and only forward when the current step validates.
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from umrah_booking.domain.booking_draft import (
    BUYER_FIELDS,
    FIRST_STEP,
    LAST_STEP,
    PARTICIPANT_FIELDS,
    BookingDraft,
)
from umrah_booking.domain.packages import PackageOffering, RoomCategory
from umrah_booking.domain.pricing import (
    DEFAULT_FEES,
    BookingQuote,
    FeeSchedule,
    PaymentMethod,
    calculate_package_price,
    calculate_quote,
)
from umrah_booking.domain.validation import validate
from umrah_booking.utils.validators import format_phone_number

PAYMENT_STEP = 5
MAX_SPOTS_PER_ROOM = 50

STEP_TITLES = {
    1: "Package & Participants",
    2: "Buyer Info",
    3: "Payment Method",
    4: "Terms & Contract",
    5: "Payment",
    6: "Summary",
}

CheckoutInitiator = Callable[[dict[str, Any]], Awaitable[Mapping[str, Any]]]


class WizardError(Exception):
    """Operation not allowed in the wizard's current state."""


@dataclass(frozen=True)
class CheckoutRedirect:
    session_id: str
    url: str


class BookingWizard:
    """Drives a BookingDraft through the booking steps for one package."""

    def __init__(
        self,
        package: PackageOffering,
        draft: BookingDraft | None = None,
        fees: FeeSchedule = DEFAULT_FEES,
        max_spots_per_room: int = MAX_SPOTS_PER_ROOM,
    ) -> None:
        self.package = package
        self.draft = draft or BookingDraft()
        self.fees = fees
        self.max_spots_per_room = max_spots_per_room
        self.checkout: CheckoutRedirect | None = None
        self.checkout_in_progress = False
        self.draft.resize_participants()

    @property
    def step(self) -> int:
        return self.draft.current_step

    @property
    def step_title(self) -> str:
        return STEP_TITLES[self.step]

    # ---- input ----

    def set_spots(self, category: RoomCategory | str, count: int) -> int:
        """Set the spot count for a room category and resync participants."""
        self._ensure_editable()
        count = max(0, min(self.max_spots_per_room, count))
        self.draft.spots.set(category, count)
        self.draft.resize_participants()
        return count

    def update_participant(self, index: int, **changes: Any) -> None:
        self._ensure_editable()
        unknown = set(changes) - PARTICIPANT_FIELDS
        if unknown:
            raise WizardError(f"Unknown participant fields: {', '.join(sorted(unknown))}")
        if not 0 <= index < len(self.draft.participants):
            raise WizardError(f"No participant at position {index + 1}")
        participant = self.draft.participants[index]
        for name, value in _formatted(changes).items():
            setattr(participant, name, value)

    def update_buyer(self, **changes: Any) -> None:
        self._ensure_editable()
        unknown = set(changes) - BUYER_FIELDS
        if unknown:
            raise WizardError(f"Unknown buyer fields: {', '.join(sorted(unknown))}")
        for name, value in _formatted(changes).items():
            setattr(self.draft.buyer_info, name, value)

    def choose_payment_method(self, method: PaymentMethod | str) -> None:
        self._ensure_editable()
        self.draft.payment_method = PaymentMethod(method)

    def accept_terms(self, accepted: bool = True) -> None:
        self._ensure_editable()
        self.draft.terms_accepted = accepted

    # ---- navigation ----

    def errors(self, today: date | None = None) -> list[str]:
        return validate(self.step, self.draft, today)

    def can_advance(self, today: date | None = None) -> bool:
        return self.step < PAYMENT_STEP and not self.errors(today)

    def next(self, today: date | None = None) -> list[str]:
        """Advance one step. Returns the blocking errors, empty on success.

        The payment step is left only through ``start_checkout``.
        """
        if self.step >= PAYMENT_STEP:
            raise WizardError("The payment step completes only through checkout")
        errors = self.errors(today)
        if not errors and self.step < LAST_STEP:
            self.draft.current_step += 1
        return errors

    def previous(self) -> int:
        self.draft.current_step = max(FIRST_STEP, self.step - 1)
        return self.step

    # ---- pricing & checkout ----

    def quote(self, today: date | None = None) -> BookingQuote:
        method = self.draft.payment_method or PaymentMethod.STRIPE
        return calculate_quote(
            self.draft.spots, method, prices=self.package.room_prices, fees=self.fees, today=today
        )

    def build_checkout_request(self) -> dict[str, Any]:
        """Checkout payload in the shape the checkout endpoint accepts."""
        buyer = self.draft.buyer_info
        return {
            "packageName": self.package.name,
            "packageId": self.package.id,
            "spots": self.draft.spots.as_dict(),
            "buyerInfo": {
                "firstName": buyer.first_name,
                "lastName": buyer.last_name,
                "email": buyer.email,
                "confirmEmail": buyer.confirm_email,
                "phone": buyer.phone,
            },
            "participants": [
                {"firstName": p.first_name, "lastName": p.last_name}
                for p in self.draft.participants
            ],
            "totalAmount": calculate_package_price(self.draft.spots, self.package.room_prices),
            "participantCount": self.draft.spots.total,
            "paymentMethod": self.draft.payment_method.value if self.draft.payment_method else None,
        }

    async def start_checkout(self, initiator: CheckoutInitiator) -> CheckoutRedirect:
        """Request a hosted checkout session and move to the summary.

        On failure the wizard stays on the payment step and the error
        propagates to the caller.
        """
        if self.step != PAYMENT_STEP:
            raise WizardError("Checkout can only start from the payment step")
        if self.checkout_in_progress:
            raise WizardError("Checkout is already in progress")

        self.checkout_in_progress = True
        try:
            response = await initiator(self.build_checkout_request())
        finally:
            self.checkout_in_progress = False

        self.checkout = CheckoutRedirect(session_id=response["sessionId"], url=response["url"])
        self.draft.current_step = LAST_STEP
        return self.checkout

    def _ensure_editable(self) -> None:
        if self.step == LAST_STEP:
            raise WizardError("The booking summary is read-only")


def _formatted(changes: dict[str, Any]) -> dict[str, Any]:
    """Phone numbers are kept in xxx-xxx-xxxx form as they are typed."""
    if isinstance(changes.get("phone"), str):
        return {**changes, "phone": format_phone_number(changes["phone"])}
    return changes
