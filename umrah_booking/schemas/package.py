"""Package catalog schemas."""

from umrah_booking.domain.packages import PackageOffering, PackageStatus
from umrah_booking.schemas.common import CamelModel


class RoomPricesResponse(CamelModel):
    dual: int
    triple: int
    quad: int


class PackageResponse(CamelModel):
    id: str
    name: str
    price: str
    dates: str
    duration: str
    status: PackageStatus
    sold_out: bool
    bookable: bool
    room_prices: RoomPricesResponse

    @classmethod
    def from_offering(cls, package: PackageOffering) -> "PackageResponse":
        return cls(
            id=package.id,
            name=package.name,
            price=package.price,
            dates=package.dates,
            duration=package.duration,
            status=package.status,
            sold_out=package.status == PackageStatus.SOLD_OUT,
            bookable=package.is_bookable,
            room_prices=RoomPricesResponse(
                dual=package.room_prices.dual,
                triple=package.room_prices.triple,
                quad=package.room_prices.quad,
            ),
        )


class PackageListResponse(CamelModel):
    packages: list[PackageResponse]
