"""Booking facts recovered from a completed checkout session."""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from typing import Any


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _split(value: str | None, separator: str) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(separator) if part.strip()]


@dataclass
class BookingRecord:
    """A paid deposit, as the checkout session metadata describes it."""

    session_id: str
    package_name: str
    package_id: str
    spots: dict[str, int]
    buyer_first_name: str
    buyer_last_name: str
    buyer_email: str
    buyer_phone: str
    participants: list[str]
    total_amount: int
    deposit_amount: int
    processing_fee: int
    remaining_amount: int
    payment_method: str
    installment_dates: list[str]
    payment_status: str = "deposit_paid"
    payment_type: str = "deposit_only"
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_session(cls, session: Mapping[str, Any]) -> "BookingRecord":
        metadata = session.get("metadata") or {}
        buyer_name = (metadata.get("buyerName") or "").split(" ")
        return cls(
            session_id=session["id"],
            package_name=metadata.get("packageName", ""),
            package_id=metadata.get("packageId", ""),
            spots={
                "dual": _int(metadata.get("dualSpots")),
                "triple": _int(metadata.get("tripleSpots")),
                "quad": _int(metadata.get("quadSpots")),
            },
            buyer_first_name=buyer_name[0],
            buyer_last_name=" ".join(buyer_name[1:]),
            buyer_email=session.get("customer_email") or metadata.get("buyerEmail", ""),
            buyer_phone=metadata.get("buyerPhone", ""),
            participants=_split(metadata.get("participantNames"), ", "),
            total_amount=_int(metadata.get("totalAmount")),
            deposit_amount=_int(metadata.get("depositAmount")),
            processing_fee=_int(metadata.get("processingFee")),
            remaining_amount=_int(metadata.get("remainingAmount")),
            payment_method=metadata.get("paymentMethod", ""),
            installment_dates=_split(metadata.get("installmentDates"), ","),
            payment_type=metadata.get("paymentType", "deposit_only"),
        )

    def as_log_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data
