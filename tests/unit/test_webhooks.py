"""Tests for Stripe webhook verification and dispatch."""

import pytest

from conftest import FakeStripeGateway, sign_payload, stripe_event
from umrah_booking.core.exceptions import (
    ConfigurationError,
    WebhookProcessingError,
    WebhookSignatureError,
)
from umrah_booking.core.idempotency import ProcessedEventStore
from umrah_booking.domain.booking_record import BookingRecord
from umrah_booking.domain.webhook_events import WebhookEventKind
from umrah_booking.services.webhook_service import EVENT_HANDLERS, WebhookDispatcher

WEBHOOK_PATH = "/api/v1/webhooks/stripe"

SESSION = {
    "id": "cs_test_123",
    "customer_email": "amina@example.com",
    "metadata": {
        "packageName": "December Umrah",
        "packageId": "december",
        "dualSpots": "2",
        "tripleSpots": "1",
        "quadSpots": "0",
        "buyerName": "Amina Bint Khan",
        "buyerPhone": "555-123-4567",
        "participantNames": "Amina Khan, Yusuf Khan, Maryam Khan",
        "totalAmount": "231555",
        "depositAmount": "225000",
        "processingFee": "6555",
        "remainingAmount": "1010000",
        "paymentMethod": "stripe",
        "installmentDates": "2027-01-01,2027-02-01,2027-03-01",
    },
}


def test_every_event_kind_has_a_handler():
    assert set(EVENT_HANDLERS) == set(WebhookEventKind)


def test_event_kind_mapping():
    assert WebhookEventKind.from_event_type("checkout.session.completed") == WebhookEventKind.CHECKOUT_SESSION_COMPLETED
    assert WebhookEventKind.from_event_type("payment_intent.payment_failed") == WebhookEventKind.PAYMENT_INTENT_FAILED
    assert WebhookEventKind.from_event_type("customer.created") == WebhookEventKind.UNRECOGNIZED
    assert WebhookEventKind.from_event_type(None) == WebhookEventKind.UNRECOGNIZED


def test_booking_record_from_session():
    record = BookingRecord.from_session(SESSION)

    assert record.session_id == "cs_test_123"
    assert record.spots == {"dual": 2, "triple": 1, "quad": 0}
    assert record.buyer_first_name == "Amina"
    assert record.buyer_last_name == "Bint Khan"
    assert record.buyer_email == "amina@example.com"
    assert record.participants == ["Amina Khan", "Yusuf Khan", "Maryam Khan"]
    assert record.deposit_amount == 225000
    assert record.installment_dates == ["2027-01-01", "2027-02-01", "2027-03-01"]
    assert record.payment_status == "deposit_paid"


def test_booking_record_tolerates_missing_metadata():
    record = BookingRecord.from_session({"id": "cs_test_empty"})

    assert record.spots == {"dual": 0, "triple": 0, "quad": 0}
    assert record.participants == []
    assert record.buyer_first_name == ""


@pytest.mark.asyncio
async def test_valid_signature_is_acknowledged(test_client):
    payload = stripe_event("checkout.session.completed", SESSION)

    response = await test_client.post(
        WEBHOOK_PATH,
        content=payload,
        headers={"Stripe-Signature": sign_payload(payload), "Content-Type": "application/json"},
    )

    assert response.status_code == 200
    assert response.json() == {"received": True}


@pytest.mark.asyncio
async def test_tampered_payload_is_rejected(test_client):
    payload = stripe_event("payment_intent.succeeded", {"id": "pi_1"})
    signature = sign_payload(payload)
    tampered = payload.replace("pi_1", "pi_2")

    response = await test_client.post(WEBHOOK_PATH, content=tampered, headers={"Stripe-Signature": signature})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid signature"}


@pytest.mark.asyncio
async def test_wrong_secret_is_rejected(test_client):
    payload = stripe_event("payment_intent.succeeded", {"id": "pi_1"})

    response = await test_client.post(
        WEBHOOK_PATH,
        content=payload,
        headers={"Stripe-Signature": sign_payload(payload, secret="whsec_other")},
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_missing_signature_is_rejected(test_client):
    response = await test_client.post(WEBHOOK_PATH, content=stripe_event("payment_intent.succeeded", {"id": "pi_1"}))

    assert response.status_code == 400
    assert response.json() == {"error": "Missing Stripe-Signature header"}


@pytest.mark.asyncio
async def test_unrecognized_event_is_acknowledged(test_client):
    payload = stripe_event("customer.created", {"id": "cus_1"})

    response = await test_client.post(WEBHOOK_PATH, content=payload, headers={"Stripe-Signature": sign_payload(payload)})

    assert response.status_code == 200
    assert response.json() == {"received": True}


@pytest.mark.asyncio
async def test_missing_webhook_secret_is_configuration_error(test_client, test_app):
    test_app.state.gateway = FakeStripeGateway()
    test_app.state.gateway.webhook_secret = None
    payload = stripe_event("payment_intent.succeeded", {"id": "pi_1"})

    response = await test_client.post(WEBHOOK_PATH, content=payload, headers={"Stripe-Signature": sign_payload(payload)})

    assert response.status_code == 500


@pytest.mark.asyncio
async def test_duplicate_delivery_runs_handler_once():
    calls = []

    async def record(event):
        calls.append(event["id"])

    handlers = {kind: record for kind in WebhookEventKind}
    store = ProcessedEventStore()
    dispatcher = WebhookDispatcher(FakeStripeGateway(), store, handlers=handlers)
    payload = stripe_event("payment_intent.succeeded", {"id": "pi_1"}, event_id="evt_dup")

    await dispatcher.handle(payload.encode(), sign_payload(payload))
    await dispatcher.handle(payload.encode(), sign_payload(payload))

    assert calls == ["evt_dup"]
    assert store.is_processed("evt_dup")


@pytest.mark.asyncio
async def test_handler_fault_is_not_marked_processed():
    attempts = []

    async def flaky(event):
        attempts.append(event["id"])
        if len(attempts) == 1:
            raise RuntimeError("downstream unavailable")

    handlers = {kind: flaky for kind in WebhookEventKind}
    store = ProcessedEventStore()
    dispatcher = WebhookDispatcher(FakeStripeGateway(), store, handlers=handlers)
    payload = stripe_event("checkout.session.completed", SESSION, event_id="evt_retry")

    with pytest.raises(WebhookProcessingError):
        await dispatcher.handle(payload.encode(), sign_payload(payload))
    assert not store.is_processed("evt_retry")

    # Stripe retries; the retry succeeds
    await dispatcher.handle(payload.encode(), sign_payload(payload))
    assert attempts == ["evt_retry", "evt_retry"]
    assert store.is_processed("evt_retry")


@pytest.mark.asyncio
async def test_signature_failure_runs_no_handler():
    calls = []

    async def record(event):
        calls.append(event)

    dispatcher = WebhookDispatcher(
        FakeStripeGateway(), ProcessedEventStore(), handlers={kind: record for kind in WebhookEventKind}
    )

    with pytest.raises(WebhookSignatureError):
        await dispatcher.handle(b'{"id": "evt_1"}', "t=1,v1=deadbeef")
    assert calls == []


@pytest.mark.asyncio
async def test_handler_fault_returns_500(test_client, monkeypatch):
    async def broken(event):
        raise KeyError("data")

    monkeypatch.setitem(EVENT_HANDLERS, WebhookEventKind.PAYMENT_INTENT_SUCCEEDED, broken)
    payload = stripe_event("payment_intent.succeeded", {"id": "pi_1"}, event_id="evt_broken")

    response = await test_client.post(WEBHOOK_PATH, content=payload, headers={"Stripe-Signature": sign_payload(payload)})

    assert response.status_code == 500
    assert response.json() == {"error": "Webhook processing failed"}


def test_participant_name_with_inner_comma():
    session = {"id": "cs_test_3", "metadata": {"participantNames": "Amina Khan,Jr, Yusuf Khan"}}

    record = BookingRecord.from_session(session)

    assert record.participants == ["Amina Khan,Jr", "Yusuf Khan"]


@pytest.mark.asyncio
async def test_missing_secret_is_logged_as_configuration(caplog):
    gateway = FakeStripeGateway()
    gateway.webhook_secret = None
    dispatcher = WebhookDispatcher(gateway, ProcessedEventStore())
    payload = stripe_event("payment_intent.succeeded", {"id": "pi_1"})

    with caplog.at_level("WARNING"), pytest.raises(ConfigurationError):
        await dispatcher.handle(payload.encode(), sign_payload(payload))

    messages = [r.getMessage() for r in caplog.records]
    assert any("not configured" in m for m in messages)
    assert not any("signature verification failed" in m for m in messages)


@pytest.mark.asyncio
async def test_bad_signature_is_logged(caplog):
    dispatcher = WebhookDispatcher(FakeStripeGateway(), ProcessedEventStore())

    with caplog.at_level("WARNING"), pytest.raises(WebhookSignatureError):
        await dispatcher.handle(b'{"id": "evt_1"}', "t=1,v1=deadbeef")

    assert any("signature verification failed" in r.getMessage() for r in caplog.records)
