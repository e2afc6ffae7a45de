"""Package catalog.

Packages are defined in code; the site has no admin surface for them.
Prices are per spot (per person) in cents.
"""

from dataclasses import dataclass, field
from enum import Enum


class RoomCategory(str, Enum):
    """Shared room categories, named after how many people share."""

    DUAL = "dual"
    TRIPLE = "triple"
    QUAD = "quad"


class PackageStatus(str, Enum):
    """Sales status of a package."""

    STANDARD = "standard"
    INQUIRY = "inquiry"
    SOLD_OUT = "sold-out"


@dataclass(frozen=True)
class RoomPrices:
    """Per-spot price for each room category."""

    dual: int = 420000
    triple: int = 395000
    quad: int = 375000

    def for_category(self, category: RoomCategory | str) -> int:
        return getattr(self, RoomCategory(category).value)


@dataclass(frozen=True)
class PackageOffering:
    """A bookable (or inquirable) tour package."""

    id: str
    name: str
    price: str
    dates: str
    duration: str
    status: PackageStatus
    room_prices: RoomPrices = field(default_factory=RoomPrices)

    @property
    def is_bookable(self) -> bool:
        return self.status == PackageStatus.STANDARD

    @property
    def accepts_inquiries(self) -> bool:
        return self.status != PackageStatus.SOLD_OUT


PACKAGES: tuple[PackageOffering, ...] = (
    PackageOffering(
        id="january",
        name="January Umrah",
        price="$3,300",
        dates="January 7-18, 2026",
        duration="10 days",
        status=PackageStatus.SOLD_OUT,
    ),
    PackageOffering(
        id="december",
        name="December Umrah",
        price="$3,750",
        dates="December 20-31, 2026",
        duration="12 days",
        status=PackageStatus.STANDARD,
    ),
    PackageOffering(
        id="august",
        name="August Umrah",
        price="$3,300",
        dates="August 5-15, 2027",
        duration="10 days",
        status=PackageStatus.INQUIRY,
    ),
)


def get_package(package_id: str) -> PackageOffering | None:
    """Look up a package by id."""
    for package in PACKAGES:
        if package.id == package_id:
            return package
    return None
