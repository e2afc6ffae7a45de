"""Booking price, deposit, processing fee and installment calculation.

All amounts are integer cents. Fee percentages are applied with
``Decimal`` and rounded half-up to whole cents; nothing here touches
floats.
"""

import calendar
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from umrah_booking.domain.packages import RoomCategory, RoomPrices

INSTALLMENT_COUNT = 3


class PaymentMethod(str, Enum):
    """How the deposit is paid. Both are processed by Stripe."""

    STRIPE = "stripe"
    BANK_TRANSFER = "bank_transfer"


@dataclass
class SpotSelection:
    """Number of spots taken in each room category."""

    dual: int = 0
    triple: int = 0
    quad: int = 0

    def __post_init__(self) -> None:
        for category in RoomCategory:
            if self.get(category) < 0:
                raise ValueError(f"{category.value} spots cannot be negative")

    @property
    def total(self) -> int:
        return self.dual + self.triple + self.quad

    def get(self, category: RoomCategory | str) -> int:
        return getattr(self, RoomCategory(category).value)

    def set(self, category: RoomCategory | str, count: int) -> None:
        if count < 0:
            raise ValueError("Spot count cannot be negative")
        setattr(self, RoomCategory(category).value, count)

    def as_dict(self) -> dict[str, int]:
        return {category.value: self.get(category) for category in RoomCategory}


@dataclass(frozen=True)
class FeeSchedule:
    """Deposit and Stripe processing fee constants."""

    deposit_per_person: int = 75000
    card_fee_rate: Decimal = Decimal("0.029")
    card_fixed_fee: int = 30
    ach_fee_rate: Decimal = Decimal("0.008")
    ach_fee_cap: int = 500

    @classmethod
    def from_settings(cls, settings) -> "FeeSchedule":
        return cls(
            deposit_per_person=settings.deposit_per_person,
            card_fee_rate=Decimal(str(settings.card_fee_rate)),
            card_fixed_fee=settings.card_fixed_fee,
            ach_fee_rate=Decimal(str(settings.ach_fee_rate)),
            ach_fee_cap=settings.ach_fee_cap,
        )


DEFAULT_FEES = FeeSchedule()
DEFAULT_ROOM_PRICES = RoomPrices()


@dataclass(frozen=True)
class Installment:
    """One scheduled payment of the remaining balance."""

    number: int
    amount: int
    due_date: date


@dataclass(frozen=True)
class BookingQuote:
    """Full price breakdown for a spot selection."""

    spots: dict[str, int]
    participant_count: int
    payment_method: PaymentMethod
    total_package_price: int
    total_deposit: int
    processing_fee: int
    total_due_today: int
    remaining_balance: int
    installments: tuple[Installment, ...]


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def cents_to_dollars(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(Decimal("0.01"))


def format_usd(cents: int) -> str:
    """Format cents for display, e.g. ``$12,350.00``."""
    return f"${cents_to_dollars(cents):,.2f}"


def calculate_package_price(spots: SpotSelection, prices: RoomPrices = DEFAULT_ROOM_PRICES) -> int:
    return sum(spots.get(category) * prices.for_category(category) for category in RoomCategory)


def calculate_deposit(participant_count: int, fees: FeeSchedule = DEFAULT_FEES) -> int:
    return participant_count * fees.deposit_per_person


def calculate_processing_fee(
    deposit: int,
    payment_method: PaymentMethod | str,
    fees: FeeSchedule = DEFAULT_FEES,
) -> int:
    """Stripe fee charged on top of the deposit.

    Bank transfers (ACH) pay a capped percentage; cards pay a percentage
    plus a fixed fee.
    """
    if PaymentMethod(payment_method) == PaymentMethod.BANK_TRANSFER:
        return min(round_half_up(Decimal(deposit) * fees.ach_fee_rate), fees.ach_fee_cap)
    return round_half_up(Decimal(deposit) * fees.card_fee_rate) + fees.card_fixed_fee


def split_installments(remaining: int, count: int = INSTALLMENT_COUNT) -> list[int]:
    """Split the remaining balance; the last installment absorbs rounding."""
    if count < 1:
        raise ValueError("At least one installment is required")
    share = round_half_up(Decimal(remaining) / count)
    amounts = [share] * (count - 1)
    amounts.append(remaining - share * (count - 1))
    return amounts


def _clamped(year: int, month: int, day: int) -> date:
    return date(year, month, min(day, calendar.monthrange(year, month)[1]))


def installment_due_dates(today: date, count: int = INSTALLMENT_COUNT) -> list[date]:
    """Due dates for the installments.

    Before December 1 installments fall on the first of January, February
    and March of next year. From December 1 on they fall on the booking's
    day of month in each of the following months, clamped to month end.
    """
    if today < date(today.year, 12, 1):
        return [date(today.year + 1, month, 1) for month in range(1, count + 1)]

    dates = []
    for offset in range(1, count + 1):
        month_index = today.month - 1 + offset
        dates.append(_clamped(today.year + month_index // 12, month_index % 12 + 1, today.day))
    return dates


def calculate_quote(
    spots: SpotSelection,
    payment_method: PaymentMethod | str,
    prices: RoomPrices = DEFAULT_ROOM_PRICES,
    fees: FeeSchedule = DEFAULT_FEES,
    today: date | None = None,
) -> BookingQuote:
    """Price a spot selection for the given payment method."""
    today = today or date.today()
    payment_method = PaymentMethod(payment_method)

    participant_count = spots.total
    package_price = calculate_package_price(spots, prices)
    deposit = calculate_deposit(participant_count, fees)
    fee = calculate_processing_fee(deposit, payment_method, fees)
    remaining = package_price - deposit

    installments = tuple(
        Installment(number=number, amount=amount, due_date=due_date)
        for number, (amount, due_date) in enumerate(
            zip(split_installments(remaining), installment_due_dates(today)), start=1
        )
    )

    return BookingQuote(
        spots=spots.as_dict(),
        participant_count=participant_count,
        payment_method=payment_method,
        total_package_price=package_price,
        total_deposit=deposit,
        processing_fee=fee,
        total_due_today=deposit + fee,
        remaining_balance=remaining,
        installments=installments,
    )
