"""
Tests for location pricing
"""

import pytest
import httpx
from decimal import Decimal

from productive_space.schemas.booking import PeopleBreakdown
from productive_space.schemas.package import TargetRole
from productive_space.services.pricing_service import (
    DEFAULT_LOCATION_PRICING,
    PricingService,
    calculate_base_subtotal,
)

KOVAN_PRICING = {
    "success": True,
    "data": {
        "student": {"oneHourRate": 4.5, "overOneHourRate": 3.5},
        "member": {"oneHourRate": 5.5, "overOneHourRate": 4.5},
        "tutor": {"oneHourRate": 6.5, "overOneHourRate": 5.5},
    }
}


@pytest.mark.unit
class TestRates:
    """Rate tiers"""

    def test_one_hour_tier(self):
        assert DEFAULT_LOCATION_PRICING.rate_for(TargetRole.STUDENT, Decimal(1)) == Decimal("4.00")
        assert DEFAULT_LOCATION_PRICING.rate_for("TUTOR", Decimal("0.5")) == Decimal("6.00")

    def test_over_one_hour_tier(self):
        assert DEFAULT_LOCATION_PRICING.rate_for(TargetRole.MEMBER, Decimal("1.5")) == Decimal("4.00")

    def test_base_subtotal(self):
        breakdown = PeopleBreakdown(coWorkers=1, coStudents=2)
        subtotal = calculate_base_subtotal(DEFAULT_LOCATION_PRICING, 3, breakdown)

        # member 4.00 * 3 + students 3.00 * 3 * 2
        assert subtotal == Decimal("30.00")

    def test_base_subtotal_empty_breakdown(self):
        assert calculate_base_subtotal(DEFAULT_LOCATION_PRICING, 2, PeopleBreakdown()) == 0


class TestPricingService:
    """Fetching location pricing"""

    @pytest.mark.asyncio
    async def test_fetches_location(self, backend, backend_client):
        backend.add("GET", "/api/pricing/Kovan", httpx.Response(200, json=KOVAN_PRICING))

        pricing = await PricingService(backend_client).get_location_pricing()

        assert pricing.student.one_hour_rate == Decimal("4.5")
        assert pricing.tutor.over_one_hour_rate == Decimal("5.5")

    @pytest.mark.asyncio
    async def test_get_rate(self, backend, backend_client):
        backend.add("GET", "/api/pricing/Kovan", httpx.Response(200, json=KOVAN_PRICING))

        rate = await PricingService(backend_client).get_rate(TargetRole.MEMBER, 3)
        assert rate == Decimal("4.5")

    @pytest.mark.asyncio
    async def test_failure_falls_back_to_defaults(self, backend, backend_client):
        backend.add("GET", "/api/pricing/Bishan", httpx.Response(404))

        pricing = await PricingService(backend_client).get_location_pricing("Bishan")
        assert pricing == DEFAULT_LOCATION_PRICING

    @pytest.mark.asyncio
    async def test_missing_data_falls_back_to_defaults(self, backend, backend_client):
        backend.add("GET", "/api/pricing/Kovan", httpx.Response(200, json={"success": True}))

        pricing = await PricingService(backend_client).get_location_pricing()
        assert pricing == DEFAULT_LOCATION_PRICING
