"""Unit tests for booking price arithmetic."""

from datetime import date
from decimal import Decimal

import pytest

from umrah_booking.domain.packages import RoomPrices
from umrah_booking.domain.pricing import (
    FeeSchedule,
    PaymentMethod,
    SpotSelection,
    calculate_deposit,
    calculate_package_price,
    calculate_processing_fee,
    calculate_quote,
    format_usd,
    installment_due_dates,
    round_half_up,
    split_installments,
)


def test_two_dual_one_triple_quote():
    """2 dual + 1 triple: $12,350 package, $2,250 deposit, $10,100 remaining."""
    quote = calculate_quote(
        SpotSelection(dual=2, triple=1),
        PaymentMethod.STRIPE,
        today=date(2026, 6, 15),
    )

    assert quote.participant_count == 3
    assert quote.total_package_price == 1235000
    assert quote.total_deposit == 225000
    assert quote.remaining_balance == 1010000
    assert [i.amount for i in quote.installments] == [336667, 336667, 336666]
    assert sum(i.amount for i in quote.installments) == quote.remaining_balance


def test_card_fee_is_percentage_plus_fixed():
    # 2.9% of $2,250 is $65.25, plus $0.30
    assert calculate_processing_fee(225000, PaymentMethod.STRIPE) == 6555


def test_ach_fee_is_capped():
    assert calculate_processing_fee(225000, PaymentMethod.BANK_TRANSFER) == 500


def test_ach_fee_below_cap():
    # 0.8% of $500 is $4.00
    assert calculate_processing_fee(50000, PaymentMethod.BANK_TRANSFER) == 400


def test_fee_accepts_method_string():
    assert calculate_processing_fee(75000, "bank_transfer") == 500


def test_total_due_today_includes_fee():
    quote = calculate_quote(SpotSelection(quad=1), PaymentMethod.STRIPE, today=date(2026, 3, 1))

    assert quote.total_deposit == 75000
    assert quote.processing_fee == 2205
    assert quote.total_due_today == 77205


def test_empty_selection_costs_nothing_today():
    quote = calculate_quote(SpotSelection(), PaymentMethod.STRIPE, today=date(2026, 3, 1))

    assert quote.total_package_price == 0
    assert quote.total_deposit == 0
    # Card fixed fee still applies to a zero deposit
    assert quote.processing_fee == 30
    assert [i.amount for i in quote.installments] == [0, 0, 0]


def test_package_price_uses_given_prices():
    prices = RoomPrices(dual=100, triple=50, quad=25)
    assert calculate_package_price(SpotSelection(dual=1, triple=2, quad=4), prices) == 300


def test_deposit_uses_fee_schedule():
    fees = FeeSchedule(deposit_per_person=50000)
    assert calculate_deposit(3, fees) == 150000


def test_split_installments_last_absorbs_remainder():
    assert split_installments(100) == [33, 33, 34]
    assert split_installments(200) == [67, 67, 66]


def test_split_installments_requires_one():
    with pytest.raises(ValueError):
        split_installments(100, count=0)


def test_round_half_up():
    assert round_half_up(Decimal("2.5")) == 3
    assert round_half_up(Decimal("3.5")) == 4
    assert round_half_up(Decimal("2.49")) == 2


def test_format_usd():
    assert format_usd(1235000) == "$12,350.00"
    assert format_usd(6555) == "$65.55"


def test_due_dates_before_december():
    assert installment_due_dates(date(2026, 11, 30)) == [
        date(2027, 1, 1),
        date(2027, 2, 1),
        date(2027, 3, 1),
    ]


def test_due_dates_from_december_follow_booking_day():
    assert installment_due_dates(date(2026, 12, 15)) == [
        date(2027, 1, 15),
        date(2027, 2, 15),
        date(2027, 3, 15),
    ]


def test_due_dates_clamp_to_month_end():
    assert installment_due_dates(date(2026, 12, 31)) == [
        date(2027, 1, 31),
        date(2027, 2, 28),
        date(2027, 3, 31),
    ]


def test_negative_spots_rejected():
    with pytest.raises(ValueError):
        SpotSelection(dual=-1)

    spots = SpotSelection()
    with pytest.raises(ValueError):
        spots.set("quad", -2)
