"""Custom validation utilities."""

import re

METADATA_VALUE_LIMIT = 500


def is_valid_email(email: object) -> bool:
    """Loose email check: a non-empty string containing '@'.

    Stripe validates the address again on its hosted page.
    """
    return isinstance(email, str) and bool(email.strip()) and "@" in email


def format_phone_number(value: str) -> str:
    """Format a US phone number as xxx-xxx-xxxx.

    Non-digits are dropped and input is cut to 10 digits; partial numbers
    are formatted as far as they go.

    Args:
        value: Phone number in any format

    Returns:
        str: Formatted number like '555-123-4567'
    """
    digits = re.sub(r"\D", "", value)[:10]
    if len(digits) <= 3:
        return digits
    if len(digits) <= 6:
        return f"{digits[:3]}-{digits[3:]}"
    return f"{digits[:3]}-{digits[3:6]}-{digits[6:]}"


def sanitize_filename_part(value: str) -> str:
    """Replace every character outside [A-Za-z0-9_-] with '_'."""
    return re.sub(r"[^a-zA-Z0-9_-]", "_", value)


def metadata_value(value: object, limit: int = METADATA_VALUE_LIMIT) -> str:
    """Stringify a value for payment processor metadata.

    Stripe rejects metadata values longer than 500 characters.
    """
    text = "" if value is None else str(value)
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."
