"""Package catalog endpoints."""

from fastapi import APIRouter

from umrah_booking.core.exceptions import NotFoundError
from umrah_booking.domain.packages import PACKAGES, get_package
from umrah_booking.schemas.package import PackageListResponse, PackageResponse

router = APIRouter()


@router.get("", response_model=PackageListResponse, response_model_by_alias=True)
async def list_packages() -> PackageListResponse:
    """List every package, including sold-out ones."""
    return PackageListResponse(packages=[PackageResponse.from_offering(p) for p in PACKAGES])


@router.get("/{package_id}", response_model=PackageResponse, response_model_by_alias=True)
async def get_package_detail(package_id: str) -> PackageResponse:
    package = get_package(package_id)
    if package is None:
        raise NotFoundError("Package", package_id)
    return PackageResponse.from_offering(package)
