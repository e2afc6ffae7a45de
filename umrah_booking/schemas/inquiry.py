"""Inquiry Pydantic schemas.

Inquiry files are written with the same camelCase shape the API returns.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import Field, field_validator

from umrah_booking.schemas.common import CamelModel


class InquiryStatus(str, Enum):
    NEW = "new"
    CONTACTED = "contacted"
    CLOSED = "closed"


class InquirySubmission(CamelModel):
    """Flat inquiry form submission."""

    package_id: str = ""
    package_name: str = ""
    package_price: str = ""
    package_dates: str = ""
    package_duration: str = ""
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254)
    phone: str = ""
    number_of_people: int | str | None = None
    preferred_contact_method: str = "email"
    message: str = Field(default="", max_length=5000)
    hear_about_us: str = ""
    travel_experience: str = ""
    special_requirements: str = Field(default="", max_length=2000)
    submitted_at: datetime | None = None

    @field_validator("first_name", "last_name", "email")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError("must be a valid email address")
        return v

    @field_validator("submitted_at")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v


class PackageSnapshot(CamelModel):
    id: str = ""
    name: str = ""
    price: str = ""
    dates: str = ""
    duration: str = ""


class CustomerBlock(CamelModel):
    first_name: str
    last_name: str
    email: str
    phone: str = ""
    full_name: str


class TravelBlock(CamelModel):
    number_of_people: int | str | None = None
    preferred_contact_method: str = "email"
    travel_experience: str = ""
    special_requirements: str = ""


class InquiryBlock(CamelModel):
    message: str = ""
    hear_about_us: str = ""
    submitted_at: datetime
    status: InquiryStatus = InquiryStatus.NEW

    @field_validator("submitted_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        return v.replace(tzinfo=UTC) if v.tzinfo is None else v


class InquiryRecord(CamelModel):
    """One stored inquiry."""

    id: str
    package: PackageSnapshot
    customer: CustomerBlock
    travel: TravelBlock
    inquiry: InquiryBlock


class InquiryCreatedResponse(CamelModel):
    success: bool = True
    inquiry_id: str
    message: str = "Inquiry submitted successfully"


class InquiryListResponse(CamelModel):
    inquiries: list[InquiryRecord]
