"""Inquiry storage.

Each inquiry is one pretty-printed JSON file in the inquiries directory.
The directory is the only store; listing reads every file back.
"""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from umrah_booking.core.exceptions import InquiryStorageError, PackageNotBookable
from umrah_booking.domain.packages import get_package
from umrah_booking.schemas.inquiry import (
    CustomerBlock,
    InquiryBlock,
    InquiryRecord,
    InquirySubmission,
    PackageSnapshot,
    TravelBlock,
)
from umrah_booking.utils.identifiers import generate_inquiry_id, inquiry_filename

logger = logging.getLogger(__name__)


def build_inquiry_record(
    submission: InquirySubmission,
    inquiry_id: str,
    now: datetime,
) -> InquiryRecord:
    """Reshape a flat form submission into the stored record."""
    return InquiryRecord(
        id=inquiry_id,
        package=PackageSnapshot(
            id=submission.package_id,
            name=submission.package_name,
            price=submission.package_price,
            dates=submission.package_dates,
            duration=submission.package_duration,
        ),
        customer=CustomerBlock(
            first_name=submission.first_name,
            last_name=submission.last_name,
            email=submission.email,
            phone=submission.phone,
            full_name=f"{submission.first_name} {submission.last_name}",
        ),
        travel=TravelBlock(
            number_of_people=submission.number_of_people,
            preferred_contact_method=submission.preferred_contact_method,
            travel_experience=submission.travel_experience,
            special_requirements=submission.special_requirements,
        ),
        inquiry=InquiryBlock(
            message=submission.message,
            hear_about_us=submission.hear_about_us,
            submitted_at=submission.submitted_at or now,
        ),
    )


class InquiryStore:
    """File-backed inquiry store."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def create(self, submission: InquirySubmission, now: datetime | None = None) -> InquiryRecord:
        """Persist a new inquiry and return the stored record.

        Raises:
            PackageNotBookable: The package is sold out
            InquiryStorageError: The file could not be written
        """
        package = get_package(submission.package_id) if submission.package_id else None
        if package is not None and not package.accepts_inquiries:
            raise PackageNotBookable(f"{package.name} is sold out")

        now = now or datetime.now(UTC)
        inquiry_id = generate_inquiry_id(int(now.timestamp() * 1000))
        record = build_inquiry_record(submission, inquiry_id, now)
        path = self.directory / inquiry_filename(
            submission.first_name, submission.last_name, record.inquiry.submitted_at, inquiry_id
        )

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with path.open("x", encoding="utf-8") as f:
                json.dump(record.model_dump(mode="json", by_alias=True), f, indent=2)
        except OSError as e:
            logger.exception(f"Failed to write inquiry file {path}")
            raise InquiryStorageError() from e

        logger.info(f"Inquiry saved: {path.name}")
        return record

    def list_inquiries(self) -> list[InquiryRecord]:
        """All stored inquiries, newest submission first."""
        if not self.directory.exists():
            return []

        records: list[InquiryRecord] = []
        try:
            for path in self.directory.glob("inquiry_*.json"):
                with path.open(encoding="utf-8") as f:
                    records.append(InquiryRecord.model_validate(json.load(f)))
        except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
            logger.exception(f"Failed to read inquiries from {self.directory}")
            raise InquiryStorageError("Failed to retrieve inquiries") from e

        records.sort(key=lambda record: record.inquiry.submitted_at, reverse=True)
        return records
