"""
Pydantic schemas for request and response validation
"""

from productive_space.schemas.seat import (
    Seat,
    Table,
    Overlay,
    Label,
    SeatRenderState,
    SeatView
)
from productive_space.schemas.package import (
    PackageType,
    TargetRole,
    UserPackage,
    PackageDiscount,
    BookingCalculation
)
from productive_space.schemas.booking import (
    PeopleBreakdown,
    BookingQuoteRequest,
    ApplyPackageRequest
)
from productive_space.schemas.payment import (
    PaymentMethod,
    PaymentSettings,
    PaymentTotal
)
from productive_space.schemas.pricing import (
    RolePricing,
    LocationPricing
)
from productive_space.schemas.response import (
    ErrorDetail,
    ErrorResponse
)

__all__ = [
    "Seat",
    "Table",
    "Overlay",
    "Label",
    "SeatRenderState",
    "SeatView",
    "PackageType",
    "TargetRole",
    "UserPackage",
    "PackageDiscount",
    "BookingCalculation",
    "PeopleBreakdown",
    "BookingQuoteRequest",
    "ApplyPackageRequest",
    "PaymentMethod",
    "PaymentSettings",
    "PaymentTotal",
    "RolePricing",
    "LocationPricing",
    "ErrorDetail",
    "ErrorResponse"
]
