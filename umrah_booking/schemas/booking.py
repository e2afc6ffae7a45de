"""Booking wizard Pydantic schemas."""

from datetime import date

from pydantic import Field

from umrah_booking.domain.booking_draft import BookingDraft, BuyerInfo, Participant
from umrah_booking.domain.pricing import BookingQuote, PaymentMethod, SpotSelection, format_usd
from umrah_booking.schemas.common import CamelModel


class SpotsPayload(CamelModel):
    """Spot counts per room category."""

    dual: int = Field(default=0, ge=0, le=50)
    triple: int = Field(default=0, ge=0, le=50)
    quad: int = Field(default=0, ge=0, le=50)

    def to_domain(self) -> SpotSelection:
        return SpotSelection(dual=self.dual, triple=self.triple, quad=self.quad)

    @property
    def total(self) -> int:
        return self.dual + self.triple + self.quad


class ParticipantPayload(CamelModel):
    first_name: str = ""
    last_name: str = ""
    date_of_birth: str = ""
    phone: str = ""
    gender: str = ""
    nationality: str = ""
    has_passport: str = ""
    passport_nationality: str = ""
    with_guardian: bool | None = None
    guardian_first_name: str = ""
    guardian_last_name: str = ""

    def to_domain(self) -> Participant:
        return Participant(**self.model_dump())


class BuyerInfoPayload(CamelModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    confirm_email: str = ""
    phone: str = ""

    def to_domain(self) -> BuyerInfo:
        return BuyerInfo(**self.model_dump())


class BookingDraftPayload(CamelModel):
    """Wizard form state as held by the browser."""

    spots: SpotsPayload = Field(default_factory=SpotsPayload)
    participants: list[ParticipantPayload] = Field(default_factory=list)
    buyer_info: BuyerInfoPayload = Field(default_factory=BuyerInfoPayload)
    payment_method: PaymentMethod | None = None
    terms_accepted: bool = False

    def to_domain(self, step: int = 1) -> BookingDraft:
        draft = BookingDraft(
            spots=self.spots.to_domain(),
            participants=[p.to_domain() for p in self.participants],
            buyer_info=self.buyer_info.to_domain(),
            payment_method=self.payment_method,
            terms_accepted=self.terms_accepted,
            current_step=step,
        )
        # Missing travelers become empty records so step 1 reports them
        draft.resize_participants()
        return draft


class ValidateStepRequest(CamelModel):
    step: int = Field(..., ge=1, le=6)
    draft: BookingDraftPayload


class ValidateStepResponse(CamelModel):
    step: int
    valid: bool
    errors: list[str]


class QuoteRequest(CamelModel):
    spots: SpotsPayload
    payment_method: PaymentMethod = PaymentMethod.STRIPE
    package_id: str | None = None


class InstallmentResponse(CamelModel):
    number: int
    amount: int
    amount_display: str
    due_date: date


class QuoteResponse(CamelModel):
    """Price breakdown; amounts in cents with formatted dollar strings."""

    spots: dict[str, int]
    participant_count: int
    payment_method: PaymentMethod
    total_package_price: int
    total_deposit: int
    processing_fee: int
    total_due_today: int
    remaining_balance: int
    installments: list[InstallmentResponse]
    display: dict[str, str]

    @classmethod
    def from_quote(cls, quote: BookingQuote) -> "QuoteResponse":
        return cls(
            spots=quote.spots,
            participant_count=quote.participant_count,
            payment_method=quote.payment_method,
            total_package_price=quote.total_package_price,
            total_deposit=quote.total_deposit,
            processing_fee=quote.processing_fee,
            total_due_today=quote.total_due_today,
            remaining_balance=quote.remaining_balance,
            installments=[
                InstallmentResponse(
                    number=i.number,
                    amount=i.amount,
                    amount_display=format_usd(i.amount),
                    due_date=i.due_date,
                )
                for i in quote.installments
            ],
            display={
                "totalPackagePrice": format_usd(quote.total_package_price),
                "totalDeposit": format_usd(quote.total_deposit),
                "processingFee": format_usd(quote.processing_fee),
                "totalDueToday": format_usd(quote.total_due_today),
                "remainingBalance": format_usd(quote.remaining_balance),
            },
        )
