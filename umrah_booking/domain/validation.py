"""Per-step validation rules for the booking wizard.

``validate`` returns human-readable messages; an empty list means the
step is complete and the wizard may advance.
"""

from datetime import date

from umrah_booking.domain.booking_draft import FIRST_STEP, LAST_STEP, BookingDraft, Participant

ADULT_AGE = 18


def parse_date_of_birth(value: str) -> date | None:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def calculate_age(date_of_birth: date, today: date) -> int:
    """Whole years elapsed since ``date_of_birth``."""
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def is_minor(participant: Participant, today: date) -> bool:
    born = parse_date_of_birth(participant.date_of_birth)
    if born is None:
        return False
    return calculate_age(born, today) < ADULT_AGE


def minor_participants(draft: BookingDraft, today: date | None = None) -> list[tuple[int, Participant]]:
    """(index, participant) pairs for every traveler under 18."""
    today = today or date.today()
    return [
        (index, participant)
        for index, participant in enumerate(draft.participants)
        if is_minor(participant, today)
    ]


def _participant_errors(draft: BookingDraft, today: date) -> list[str]:
    errors: list[str] = []

    if draft.spots.total == 0:
        errors.append("Please select at least one room spot")

    required = (
        ("first_name", "First name"),
        ("last_name", "Last name"),
        ("date_of_birth", "Date of birth"),
        ("phone", "Phone number"),
        ("gender", "Gender"),
        ("nationality", "Nationality"),
        ("has_passport", "Passport status"),
    )
    for index, participant in enumerate(draft.participants):
        person = f"Person {index + 1}"
        for attr, label in required:
            if not getattr(participant, attr):
                errors.append(f"{person}: {label} is required")
        if participant.date_of_birth and parse_date_of_birth(participant.date_of_birth) is None:
            errors.append(f"{person}: Date of birth is invalid")
        if participant.has_passport == "yes" and not participant.passport_nationality:
            errors.append(f"{person}: Passport issuing country is required")

    for index, participant in minor_participants(draft, today):
        person = f"Person {index + 1}"
        if participant.with_guardian is None:
            errors.append(f"{person}: Guardian status is required (under 18)")
        elif participant.with_guardian:
            if not participant.guardian_first_name:
                errors.append(f"{person}: Guardian first name is required")
            if not participant.guardian_last_name:
                errors.append(f"{person}: Guardian last name is required")

    return errors


def _buyer_errors(draft: BookingDraft) -> list[str]:
    buyer = draft.buyer_info
    errors: list[str] = []
    if not buyer.first_name:
        errors.append("Buyer first name is required")
    if not buyer.last_name:
        errors.append("Buyer last name is required")
    if not buyer.email:
        errors.append("Buyer email is required")
    if not buyer.confirm_email:
        errors.append("Email confirmation is required")
    if buyer.email and buyer.confirm_email and buyer.email != buyer.confirm_email:
        errors.append("Email addresses do not match")
    if not buyer.phone:
        errors.append("Buyer phone number is required")
    return errors


def validate(step: int, draft: BookingDraft, today: date | None = None) -> list[str]:
    """Validation errors for ``step`` of ``draft``.

    Raises:
        ValueError: If ``step`` is not a wizard step
    """
    if not FIRST_STEP <= step <= LAST_STEP:
        raise ValueError(f"Unknown wizard step: {step}")

    if step == 1:
        return _participant_errors(draft, today or date.today())
    if step == 2:
        return _buyer_errors(draft)
    if step == 3:
        return [] if draft.payment_method else ["Please select a payment method"]
    if step == 4:
        if not draft.terms_accepted:
            return ["You must accept the terms and conditions to continue"]
        return []
    # Payment completes by creating a checkout session; summary is read-only
    return []
