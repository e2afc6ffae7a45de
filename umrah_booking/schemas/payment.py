"""Payment-related Pydantic schemas."""

from pydantic import Field

from umrah_booking.domain.pricing import PaymentMethod
from umrah_booking.schemas.booking import BuyerInfoPayload, SpotsPayload
from umrah_booking.schemas.common import CamelModel


class CheckoutParticipant(CamelModel):
    """Participant names; any other participant fields are ignored."""

    first_name: str = ""
    last_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class CheckoutRequest(CamelModel):
    """Schema for creating a hosted checkout session."""

    package_name: str = Field(..., min_length=1, max_length=200)
    package_id: str = Field(..., min_length=1, max_length=100)
    spots: SpotsPayload
    buyer_info: BuyerInfoPayload
    participants: list[CheckoutParticipant] = Field(default_factory=list)
    # Client-side package total in cents; informational only
    total_amount: int | None = None
    participant_count: int | None = Field(None, ge=0)
    payment_method: PaymentMethod = PaymentMethod.STRIPE


class CheckoutSessionResponse(CamelModel):
    session_id: str
    url: str


class PaymentIntentRequest(CamelModel):
    """Schema for creating a payment intent for the embedded payment form."""

    package_id: str = Field(..., min_length=1, max_length=100)
    spots: SpotsPayload
    payment_method: PaymentMethod = PaymentMethod.STRIPE
    currency: str | None = Field(None, min_length=3, max_length=3)
    metadata: dict[str, str] = Field(default_factory=dict)


class PaymentIntentResponse(CamelModel):
    client_secret: str
    payment_intent_id: str
    amount: int


class PaymentConfigResponse(CamelModel):
    publishable_key: str | None
    currency: str


class WebhookAck(CamelModel):
    received: bool = True
