"""Identifier and filename generation utilities."""

import random
import string
import time
from datetime import datetime

from umrah_booking.utils.validators import sanitize_filename_part

BASE36 = string.digits + string.ascii_lowercase


def generate_inquiry_id(now_ms: int | None = None) -> str:
    """Generate an inquiry id.

    Returns:
        str: Inquiry id like 'inq_1760880000000_k3j9x0a2b'
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    random_part = "".join(random.choices(BASE36, k=9))
    return f"inq_{now_ms}_{random_part}"


def inquiry_filename(first_name: str, last_name: str, submitted: datetime, inquiry_id: str) -> str:
    """File name for a stored inquiry.

    The inquiry id makes the name unique even for two submissions from the
    same person on the same day.

    Returns:
        str: File name like 'inquiry_Amina_Khan_2026-10-19_inq_..._abc.json'
    """
    name = sanitize_filename_part(f"{first_name}_{last_name}")
    return f"inquiry_{name}_{submitted.date().isoformat()}_{inquiry_id}.json"
