"""
Booking pricing endpoints
"""

from fastapi import APIRouter, Depends

from productive_space.core.backend import get_package_client
from productive_space.schemas.booking import (
    ApplyPackageRequest,
    ApplyPackageResponse,
    BookingQuoteRequest,
    BookingQuoteResponse,
)
from productive_space.services.package_service import (
    PackageClient,
    format_package_discount,
    quote_booking,
)

router = APIRouter()


@router.post("/quote", response_model=BookingQuoteResponse)
async def quote(
    request: BookingQuoteRequest,
    package_client: PackageClient = Depends(get_package_client)
) -> BookingQuoteResponse:
    """
    Price a booking against the user's packages.
    An unreachable package service prices the booking in full.
    """
    calculation, packages_available = await quote_booking(
        package_client,
        request.user_id,
        request.user_role,
        request.hours,
        request.people,
        request.hourly_rate
    )
    summary = None
    if calculation.package_discount is not None:
        summary = format_package_discount(calculation.package_discount)

    return BookingQuoteResponse(
        calculation=calculation,
        packages_available=packages_available,
        summary=summary
    )


@router.post("/apply-package", response_model=ApplyPackageResponse)
async def apply_package(
    request: ApplyPackageRequest,
    package_client: PackageClient = Depends(get_package_client)
) -> ApplyPackageResponse:
    """
    Persist a package discount on a booking
    """
    await package_client.apply_package(
        request.booking_id,
        request.package_id,
        request.applied_hours
    )
    return ApplyPackageResponse(
        success=True,
        booking_id=request.booking_id,
        package_id=request.package_id,
        applied_hours=request.applied_hours
    )
