"""
Booking schemas for request/response models
"""

from typing import Optional
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field

from productive_space.config import settings
from productive_space.schemas.package import BookingCalculation, TargetRole


class PeopleBreakdown(BaseModel):
    """Headcount per member role in one booking"""
    model_config = ConfigDict(populate_by_name=True)

    co_workers: int = Field(0, alias="coWorkers", ge=0)
    co_tutors: int = Field(0, alias="coTutors", ge=0)
    co_students: int = Field(0, alias="coStudents", ge=0)


class BookingQuoteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1)
    user_role: TargetRole = Field(..., alias="userRole")
    hours: Decimal = Field(..., gt=0)
    people: int = Field(1, ge=1, le=settings.MAX_PEOPLE_PER_BOOKING)
    hourly_rate: Optional[Decimal] = Field(None, alias="hourlyRate", ge=0)


class BookingQuoteResponse(BaseModel):
    calculation: BookingCalculation
    packages_available: bool
    summary: Optional[str] = None


class ApplyPackageRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    booking_id: str = Field(..., alias="bookingId", min_length=1)
    package_id: str = Field(..., alias="packageId", min_length=1)
    applied_hours: Decimal = Field(..., alias="appliedHours", ge=0)


class ApplyPackageResponse(BaseModel):
    success: bool
    booking_id: str
    package_id: str
    applied_hours: Decimal
