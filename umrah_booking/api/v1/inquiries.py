"""Inquiry endpoints for packages that are not open for online booking."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from umrah_booking.api.deps import ERROR_RESPONSES, get_inquiry_store
from umrah_booking.schemas.inquiry import (
    InquiryCreatedResponse,
    InquiryListResponse,
    InquirySubmission,
)
from umrah_booking.services.inquiry_service import InquiryStore

logger = logging.getLogger(__name__)

router = APIRouter(responses=ERROR_RESPONSES)


@router.post(
    "",
    response_model=InquiryCreatedResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
async def submit_inquiry(
    submission: InquirySubmission,
    store: Annotated[InquiryStore, Depends(get_inquiry_store)],
) -> InquiryCreatedResponse:
    """Store an inquiry as a JSON file."""
    record = store.create(submission)
    logger.info(f"Inquiry {record.id} received for package {submission.package_id or '-'}")
    return InquiryCreatedResponse(inquiry_id=record.id)


@router.get("", response_model=InquiryListResponse, response_model_by_alias=True)
async def list_inquiries(
    store: Annotated[InquiryStore, Depends(get_inquiry_store)],
) -> InquiryListResponse:
    """All stored inquiries, newest first."""
    return InquiryListResponse(inquiries=store.list_inquiries())
