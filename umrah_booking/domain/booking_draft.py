"""In-progress booking data collected by the wizard."""

from dataclasses import dataclass, field, fields

from umrah_booking.domain.pricing import PaymentMethod, SpotSelection

FIRST_STEP = 1
LAST_STEP = 6


@dataclass
class Participant:
    """One traveler occupying a spot."""

    first_name: str = ""
    last_name: str = ""
    date_of_birth: str = ""
    phone: str = ""
    gender: str = ""
    nationality: str = ""
    has_passport: str = ""
    passport_nationality: str = ""
    # Only asked for travelers under 18
    with_guardian: bool | None = None
    guardian_first_name: str = ""
    guardian_last_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class BuyerInfo:
    """Contact details of whoever pays; not necessarily a traveler."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    confirm_email: str = ""
    phone: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class BookingDraft:
    spots: SpotSelection = field(default_factory=SpotSelection)
    participants: list[Participant] = field(default_factory=list)
    buyer_info: BuyerInfo = field(default_factory=BuyerInfo)
    payment_method: PaymentMethod | None = None
    terms_accepted: bool = False
    current_step: int = FIRST_STEP

    def resize_participants(self) -> None:
        """Match the participant list to the spot total.

        Entries at surviving indexes are kept as-is; new slots get empty
        records and only entries past the new total are dropped.
        """
        total = self.spots.total
        if len(self.participants) > total:
            del self.participants[total:]
        while len(self.participants) < total:
            self.participants.append(Participant())


PARTICIPANT_FIELDS = frozenset(f.name for f in fields(Participant))
BUYER_FIELDS = frozenset(f.name for f in fields(BuyerInfo))
