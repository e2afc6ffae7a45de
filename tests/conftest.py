"""Test configuration and fixtures."""

import hashlib
import hmac
import json
import time

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from umrah_booking.config import Settings
from umrah_booking.gateways.base import (
    CheckoutSessionParams,
    CheckoutSessionResult,
    PaymentIntentResult,
)
from umrah_booking.gateways.stripe_gateway import StripeGateway
from umrah_booking.main import create_application

WEBHOOK_SECRET = "whsec_test_secret"


class FakeStripeGateway(StripeGateway):
    """Stripe gateway that records requests instead of calling Stripe.

    Webhook verification is inherited, so signatures are checked for real.
    """

    def __init__(self, fail: bool = False):
        super().__init__(
            secret_key="sk_test_fake",
            webhook_secret=WEBHOOK_SECRET,
            publishable_key="pk_test_fake",
        )
        self.fail = fail
        self.checkout_calls: list[CheckoutSessionParams] = []
        self.intent_calls: list[dict] = []

    async def create_checkout_session(self, params: CheckoutSessionParams) -> CheckoutSessionResult:
        self.checkout_calls.append(params)
        if self.fail:
            return CheckoutSessionResult(success=False, error_message="card_declined")
        return CheckoutSessionResult(
            success=True,
            session_id="cs_test_123",
            url="https://checkout.stripe.com/c/pay/cs_test_123",
        )

    async def create_payment_intent(self, amount, currency, description, metadata=None) -> PaymentIntentResult:
        self.intent_calls.append(
            {"amount": amount, "currency": currency, "description": description, "metadata": metadata}
        )
        if self.fail:
            return PaymentIntentResult(success=False, error_message="api_error")
        return PaymentIntentResult(
            success=True,
            intent_id="pi_test_123",
            client_secret="pi_test_123_secret_abc",
            amount=amount,
        )


def sign_payload(payload: str, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    """Build a Stripe-Signature header the way Stripe does."""
    timestamp = timestamp or int(time.time())
    signed = f"{timestamp}.{payload}".encode()
    digest = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


def stripe_event(event_type: str, obj: dict, event_id: str = "evt_test_1") -> str:
    return json.dumps({"id": event_id, "type": event_type, "data": {"object": obj}})


@pytest.fixture
def test_settings(tmp_path):
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        environment="development",
        stripe_secret_key="sk_test_fake",
        stripe_publishable_key="pk_test_fake",
        stripe_webhook_secret=WEBHOOK_SECRET,
        stripe_success_url="http://localhost:3000/booking-success",
        stripe_cancel_url="http://localhost:3000/booking-cancel",
        inquiries_dir=tmp_path / "inquiries",
    )


@pytest.fixture
def fake_gateway():
    return FakeStripeGateway()


@pytest.fixture
def test_app(test_settings, fake_gateway):
    """Application wired to the fake gateway."""
    app = create_application(test_settings)
    app.state.gateway = fake_gateway
    return app


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_checkout_request():
    """Two dual-room spots on the December package."""
    return {
        "packageName": "December Umrah",
        "packageId": "december",
        "spots": {"dual": 2, "triple": 0, "quad": 0},
        "buyerInfo": {
            "firstName": "Amina",
            "lastName": "Khan",
            "email": "amina@example.com",
            "confirmEmail": "amina@example.com",
            "phone": "555-123-4567",
        },
        "participants": [
            {"firstName": "Amina", "lastName": "Khan"},
            {"firstName": "Yusuf", "lastName": "Khan"},
        ],
        "totalAmount": 840000,
        "participantCount": 2,
        "paymentMethod": "stripe",
    }


@pytest.fixture
def sample_inquiry():
    return {
        "packageId": "august",
        "packageName": "August Umrah",
        "packagePrice": "$3,300",
        "packageDates": "August 5-15, 2027",
        "packageDuration": "10 days",
        "firstName": "Omar",
        "lastName": "Siddiqui",
        "email": "omar@example.com",
        "phone": "555-987-6543",
        "numberOfPeople": 3,
        "preferredContactMethod": "phone",
        "message": "Is there a family room option?",
        "hearAboutUs": "friend",
    }
