"""
Location pricing lookup
"""

from decimal import Decimal
from typing import Optional
import logging

import httpx

from productive_space.config import settings
from productive_space.schemas.booking import PeopleBreakdown
from productive_space.schemas.package import TargetRole
from productive_space.schemas.pricing import LocationPricing, RolePricing
from productive_space.services.payment_service import Number, to_decimal

logger = logging.getLogger(__name__)

# Kovan rates, used whenever the backend cannot be reached
DEFAULT_LOCATION_PRICING = LocationPricing(
    student=RolePricing(one_hour_rate=Decimal("4.00"), over_one_hour_rate=Decimal("3.00")),
    member=RolePricing(one_hour_rate=Decimal("5.00"), over_one_hour_rate=Decimal("4.00")),
    tutor=RolePricing(one_hour_rate=Decimal("6.00"), over_one_hour_rate=Decimal("5.00")),
)


class PricingService:
    """Reads per-role hourly rates for a location from the booking backend"""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def get_location_pricing(self, location: Optional[str] = None) -> LocationPricing:
        location = location or settings.DEFAULT_LOCATION
        try:
            response = await self.client.get(f"/api/pricing/{location}")
            response.raise_for_status()
            return LocationPricing.model_validate(response.json()["data"])
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Error getting pricing for {location}, using defaults: {e}")
            return DEFAULT_LOCATION_PRICING

    async def get_rate(
        self,
        role: TargetRole,
        hours: Number,
        location: Optional[str] = None
    ) -> Decimal:
        pricing = await self.get_location_pricing(location)
        return pricing.rate_for(role, to_decimal(hours))


def calculate_base_subtotal(
    pricing: LocationPricing,
    hours: Number,
    breakdown: PeopleBreakdown
) -> Decimal:
    """Full price of a booking before any package, promo code or credit"""
    hours = to_decimal(hours)
    headcount = {
        TargetRole.STUDENT: breakdown.co_students,
        TargetRole.MEMBER: breakdown.co_workers,
        TargetRole.TUTOR: breakdown.co_tutors,
    }
    return sum(
        (pricing.rate_for(role, hours) * hours * count for role, count in headcount.items()),
        Decimal(0)
    )
