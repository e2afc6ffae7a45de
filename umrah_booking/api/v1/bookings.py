"""Booking wizard endpoints.

The wizard state lives in the browser. These endpoints price a spot
selection and validate one wizard step so the server and the page agree
on both.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from umrah_booking.api.deps import get_app_settings
from umrah_booking.config import Settings
from umrah_booking.core.exceptions import NotFoundError
from umrah_booking.domain.packages import get_package
from umrah_booking.domain.pricing import DEFAULT_ROOM_PRICES, FeeSchedule, calculate_quote
from umrah_booking.domain.validation import validate
from umrah_booking.schemas.booking import (
    QuoteRequest,
    QuoteResponse,
    ValidateStepRequest,
    ValidateStepResponse,
)

router = APIRouter()


@router.post("/quote", response_model=QuoteResponse, response_model_by_alias=True)
async def quote_booking(
    request: QuoteRequest,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> QuoteResponse:
    """Price a spot selection: deposit, fee, due today and installments."""
    prices = DEFAULT_ROOM_PRICES
    if request.package_id:
        package = get_package(request.package_id)
        if package is None:
            raise NotFoundError("Package", request.package_id)
        prices = package.room_prices

    quote = calculate_quote(
        request.spots.to_domain(),
        request.payment_method,
        prices=prices,
        fees=FeeSchedule.from_settings(settings),
    )
    return QuoteResponse.from_quote(quote)


@router.post("/validate", response_model=ValidateStepResponse, response_model_by_alias=True)
async def validate_step(request: ValidateStepRequest) -> ValidateStepResponse:
    """Validate one wizard step against the submitted draft."""
    draft = request.draft.to_domain(step=request.step)
    errors = validate(request.step, draft)
    return ValidateStepResponse(step=request.step, valid=not errors, errors=errors)
