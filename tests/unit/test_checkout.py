"""Tests for checkout session and payment intent creation."""

from datetime import date

import pytest

from umrah_booking.gateways.unconfigured import UnconfiguredGateway
from umrah_booking.schemas.payment import CheckoutRequest
from umrah_booking.services.checkout_service import (
    CHECKOUT_FAILED_MESSAGE,
    CheckoutService,
    build_booking_metadata,
)

CHECKOUT_PATH = "/api/v1/payments/checkout-session"


@pytest.mark.asyncio
async def test_checkout_session_created(test_client, fake_gateway, sample_checkout_request):
    response = await test_client.post(CHECKOUT_PATH, json=sample_checkout_request)

    assert response.status_code == 200
    assert response.json() == {
        "sessionId": "cs_test_123",
        "url": "https://checkout.stripe.com/c/pay/cs_test_123",
    }

    params = fake_gateway.checkout_calls[0]
    # $1,500 deposit for two people plus 2.9% + $0.30
    assert [item.unit_amount for item in params.line_items] == [150000, 4380]
    assert params.line_items[0].name == "December Umrah - Deposit"
    assert params.customer_email == "amina@example.com"
    assert params.payment_method_types == ["card", "link"]
    assert params.success_url == "http://localhost:3000/booking-success?session_id={CHECKOUT_SESSION_ID}"
    assert params.metadata["dualSpots"] == "2"
    assert params.metadata["participantNames"] == "Amina Khan, Yusuf Khan"
    assert params.metadata["totalAmount"] == "154380"
    assert all(isinstance(v, str) for v in params.metadata.values())


@pytest.mark.asyncio
async def test_bank_transfer_uses_ach(test_client, fake_gateway, sample_checkout_request):
    sample_checkout_request["paymentMethod"] = "bank_transfer"

    response = await test_client.post(CHECKOUT_PATH, json=sample_checkout_request)

    assert response.status_code == 200
    params = fake_gateway.checkout_calls[0]
    assert "us_bank_account" in params.payment_method_types
    assert params.line_items[1].unit_amount == 500


@pytest.mark.asyncio
async def test_client_total_is_not_trusted(test_client, fake_gateway, sample_checkout_request):
    sample_checkout_request["totalAmount"] = 100

    response = await test_client.post(CHECKOUT_PATH, json=sample_checkout_request)

    assert response.status_code == 200
    assert fake_gateway.checkout_calls[0].metadata["totalPackagePrice"] == "840000"


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["", "not-an-email", "   "])
async def test_invalid_email_rejected(test_client, fake_gateway, sample_checkout_request, email):
    sample_checkout_request["buyerInfo"]["email"] = email

    response = await test_client.post(CHECKOUT_PATH, json=sample_checkout_request)

    assert response.status_code == 400
    assert response.json() == {"error": "Valid email address is required"}
    assert fake_gateway.checkout_calls == []


@pytest.mark.asyncio
async def test_unconfigured_stripe(test_client, test_app, sample_checkout_request):
    test_app.state.gateway = UnconfiguredGateway()

    response = await test_client.post(CHECKOUT_PATH, json=sample_checkout_request)

    assert response.status_code == 500
    assert response.json() == {"error": "Stripe is not properly configured"}


@pytest.mark.asyncio
async def test_gateway_failure(test_client, fake_gateway, sample_checkout_request):
    fake_gateway.fail = True

    response = await test_client.post(CHECKOUT_PATH, json=sample_checkout_request)

    assert response.status_code == 502
    assert response.json() == {"error": CHECKOUT_FAILED_MESSAGE}


@pytest.mark.asyncio
async def test_sold_out_package_rejected(test_client, fake_gateway, sample_checkout_request):
    sample_checkout_request["packageId"] = "january"

    response = await test_client.post(CHECKOUT_PATH, json=sample_checkout_request)

    assert response.status_code == 400
    assert fake_gateway.checkout_calls == []


@pytest.mark.asyncio
async def test_unknown_package(test_client, sample_checkout_request):
    sample_checkout_request["packageId"] = "ramadan"

    response = await test_client.post(CHECKOUT_PATH, json=sample_checkout_request)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_no_spots_rejected(test_client, sample_checkout_request):
    sample_checkout_request["spots"] = {"dual": 0, "triple": 0, "quad": 0}

    response = await test_client.post(CHECKOUT_PATH, json=sample_checkout_request)

    assert response.status_code == 400
    assert response.json() == {"error": "Please select at least one room spot"}


@pytest.mark.asyncio
async def test_payment_intent(test_client, fake_gateway):
    response = await test_client.post(
        "/api/v1/payments/intent",
        json={"packageId": "december", "spots": {"quad": 1}, "metadata": {"source": "web"}},
    )

    assert response.status_code == 200
    assert response.json() == {
        "clientSecret": "pi_test_123_secret_abc",
        "paymentIntentId": "pi_test_123",
        "amount": 77205,
    }
    call = fake_gateway.intent_calls[0]
    assert call["currency"] == "usd"
    assert call["metadata"]["source"] == "web"
    assert call["metadata"]["depositAmount"] == "75000"


@pytest.mark.asyncio
async def test_payment_config_exposes_publishable_key_only(test_client):
    response = await test_client.get("/api/v1/payments/config")

    assert response.status_code == 200
    assert response.json() == {"publishableKey": "pk_test_fake", "currency": "usd"}


@pytest.mark.asyncio
async def test_service_installment_dates_in_metadata(fake_gateway, test_settings, sample_checkout_request):
    service = CheckoutService(fake_gateway, test_settings)
    request = CheckoutRequest.model_validate(sample_checkout_request)

    await service.create_checkout_session(request, today=date(2026, 10, 19))

    metadata = fake_gateway.checkout_calls[0].metadata
    assert metadata["installmentDates"] == "2027-01-01,2027-02-01,2027-03-01"
    assert metadata["installmentAmounts"] == "230000,230000,230000"
    assert metadata["remainingAmount"] == "690000"


def test_metadata_values_are_truncated(sample_checkout_request):
    from umrah_booking.domain.packages import get_package
    from umrah_booking.domain.pricing import calculate_quote

    sample_checkout_request["participants"] = [
        {"firstName": f"Traveler{i}", "lastName": "X" * 40} for i in range(20)
    ]
    request = CheckoutRequest.model_validate(sample_checkout_request)
    package = get_package("december")
    quote = calculate_quote(request.spots.to_domain(), request.payment_method, prices=package.room_prices)

    metadata = build_booking_metadata(request, package, quote)

    assert len(metadata["participantNames"]) == 500
    assert metadata["participantNames"].endswith("...")
