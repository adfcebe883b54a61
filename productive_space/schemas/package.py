"""
Package schemas: prepaid hour bundles and the discount they yield
"""

from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field
import enum


class PackageType(str, enum.Enum):
    HALF_DAY = "HALF_DAY"
    FULL_DAY = "FULL_DAY"
    SEMESTER_BUNDLE = "SEMESTER_BUNDLE"


class TargetRole(str, enum.Enum):
    STUDENT = "STUDENT"
    MEMBER = "MEMBER"
    TUTOR = "TUTOR"


# Hours a package covers for one person on one day
PACKAGE_HOUR_LIMITS = {
    PackageType.HALF_DAY: 4,
    PackageType.FULL_DAY: 8,
    PackageType.SEMESTER_BUNDLE: 4,
}

PACKAGE_TYPE_DISPLAY = {
    PackageType.HALF_DAY: "Half-Day",
    PackageType.FULL_DAY: "Full-Day",
    PackageType.SEMESTER_BUNDLE: "Semester Bundle",
}


class UserPackage(BaseModel):
    """A package owned by a user, as returned by the booking backend"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    package_id: str = Field(..., alias="packageId")
    package_name: str = Field(..., alias="packageName")
    package_type: PackageType = Field(..., alias="packageType")
    target_role: TargetRole = Field(..., alias="targetRole")
    remaining_count: int = Field(..., alias="remainingCount", ge=0)
    total_count: int = Field(0, alias="totalCount", ge=0)
    expires_at: Optional[datetime] = Field(None, alias="expiresAt")

    @property
    def daily_hour_limit(self) -> int:
        return PACKAGE_HOUR_LIMITS[self.package_type]


class UserPackagesResponse(BaseModel):
    success: bool
    packages: List[UserPackage] = []
    message: Optional[str] = None


class PackageDiscount(BaseModel):
    package_id: str
    package_name: str
    package_type: PackageType
    target_role: TargetRole
    discount_hours: Decimal
    applied_hours: Decimal
    remaining_hours: Decimal
    discount_amount: Decimal
    final_price: Decimal


class BookingCalculation(BaseModel):
    """Priced breakdown of a booking, with at most one package applied"""
    total_hours: Decimal
    base_price: Decimal
    package_discount: Optional[PackageDiscount] = None
    final_price: Decimal
    skip_payment: bool = False
