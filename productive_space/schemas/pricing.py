"""
Pricing schemas
"""

from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field

from productive_space.schemas.package import TargetRole


class RolePricing(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    one_hour_rate: Decimal = Field(..., alias="oneHourRate", ge=0)
    over_one_hour_rate: Decimal = Field(..., alias="overOneHourRate", ge=0)

    def rate_for(self, hours: Decimal) -> Decimal:
        """Bookings of up to one hour are charged the one-hour rate"""
        return self.one_hour_rate if hours <= 1 else self.over_one_hour_rate


class LocationPricing(BaseModel):
    student: RolePricing
    member: RolePricing
    tutor: RolePricing

    def for_role(self, role: TargetRole) -> RolePricing:
        return getattr(self, TargetRole(role).value.lower())

    def rate_for(self, role: TargetRole, hours: Decimal) -> Decimal:
        return self.for_role(role).rate_for(hours)
