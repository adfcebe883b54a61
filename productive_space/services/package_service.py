"""
Package discount calculation and the booking backend calls around it
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple, Union
import logging

import httpx
from pydantic import ValidationError as SchemaValidationError

from productive_space.core.exceptions import PackageApplicationError, ValidationError
from productive_space.schemas.booking import PeopleBreakdown
from productive_space.schemas.package import (
    PACKAGE_HOUR_LIMITS,
    PACKAGE_TYPE_DISPLAY,
    BookingCalculation,
    PackageDiscount,
    TargetRole,
    UserPackage,
    UserPackagesResponse,
)
from productive_space.services.payment_service import Number, format_currency, to_decimal

logger = logging.getLogger(__name__)

# Fallback hourly rates when no location pricing is at hand
HOURLY_RATES = {
    TargetRole.STUDENT: Decimal("5.00"),
    TargetRole.MEMBER: Decimal("6.00"),
    TargetRole.TUTOR: Decimal("4.00"),
}


def get_hourly_rate(user_role: Union[TargetRole, str]) -> Decimal:
    return HOURLY_RATES[TargetRole(user_role)]


def calculate_total_hours(duration: Number, seats: int) -> Decimal:
    return to_decimal(duration) * seats


def resolve_package_holder_role(breakdown: PeopleBreakdown) -> TargetRole:
    """Role whose rate the package holder is charged at: students, then tutors, else members"""
    if breakdown.co_students > 0:
        return TargetRole.STUDENT
    if breakdown.co_tutors > 0:
        return TargetRole.TUTOR
    return TargetRole.MEMBER


def select_best_package(packages: Iterable[UserPackage]) -> Optional[UserPackage]:
    """Package with the largest daily hour limit; the earliest one wins a tie."""
    best = None
    for package in packages:
        if best is None or package.daily_hour_limit > best.daily_hour_limit:
            best = package
    return best


def calculate_package_discount(
    individual_hours: Number,
    total_people: int,
    user_packages: Iterable[UserPackage],
    user_role: Union[TargetRole, str],
    hourly_rate: Number
) -> BookingCalculation:
    """
    Price a booking, offsetting it with at most one of the user's packages.

    The package covers the hours of a single person only, capped at the
    package's daily limit. Everyone else in the booking pays full price.
    """
    hours = to_decimal(individual_hours)
    rate = to_decimal(hourly_rate)
    if hours < 0:
        raise ValidationError("Hours cannot be negative", field="individual_hours")
    if total_people < 1:
        raise ValidationError("A booking needs at least one person", field="total_people")
    if rate < 0:
        raise ValidationError("Hourly rate cannot be negative", field="hourly_rate")

    role = TargetRole(user_role)
    total_hours = hours * total_people
    base_price = total_hours * rate

    applicable = [
        pkg for pkg in user_packages
        if pkg.target_role == role and pkg.remaining_count > 0
    ]
    best = select_best_package(applicable)
    if best is None:
        return BookingCalculation(
            total_hours=total_hours,
            base_price=base_price,
            final_price=base_price,
            skip_payment=False
        )

    discount_hours = Decimal(best.daily_hour_limit)
    applied_hours = min(hours, discount_hours)
    remaining_hours = max(Decimal(0), hours - applied_hours)
    discount_amount = applied_hours * rate
    final_price = remaining_hours * rate + hours * rate * (total_people - 1)

    logger.debug(
        f"Package {best.id} covers {applied_hours}h of {hours}h "
        f"for 1 of {total_people} people"
    )

    return BookingCalculation(
        total_hours=total_hours,
        base_price=base_price,
        package_discount=PackageDiscount(
            package_id=best.id,
            package_name=best.package_name,
            package_type=best.package_type,
            target_role=best.target_role,
            discount_hours=discount_hours,
            applied_hours=applied_hours,
            remaining_hours=remaining_hours,
            discount_amount=discount_amount,
            final_price=final_price
        ),
        final_price=final_price,
        skip_payment=final_price == 0
    )


def _format_hours(hours: Decimal) -> str:
    return f"{hours.normalize():f}"


def format_package_discount(discount: PackageDiscount) -> str:
    name = discount.package_name or PACKAGE_TYPE_DISPLAY[discount.package_type]
    applied = _format_hours(discount.applied_hours)
    saved = format_currency(discount.discount_amount)
    if discount.remaining_hours == 0:
        return f"{name} applied - {applied} hours covered (${saved} saved)"
    return (
        f"{name} applied - {applied} hours covered, "
        f"{_format_hours(discount.remaining_hours)} hours remaining "
        f"(${saved} saved, ${format_currency(discount.final_price)} to pay)"
    )


class PackageClient:
    """Booking backend calls for fetching and redeeming packages"""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def get_user_packages(
        self,
        user_id: str,
        user_role: Union[TargetRole, str],
        now: Optional[datetime] = None
    ) -> List[UserPackage]:
        """
        Packages the user can spend on a booking right now.

        Any failure is logged and yields an empty list so the booking can
        still go ahead at full price.
        """
        role = TargetRole(user_role)
        try:
            response = await self.client.get(f"/booking/user-packages/{user_id}/{role.value}")
            response.raise_for_status()
            payload = UserPackagesResponse.model_validate(response.json())
        except (httpx.HTTPError, SchemaValidationError, ValueError) as e:
            logger.error(f"Error fetching packages for user {user_id}: {e}")
            return []

        if not payload.success:
            logger.error(
                f"Error fetching packages for user {user_id}: "
                f"{payload.message or 'Failed to fetch user packages'}"
            )
            return []

        now = now or datetime.now(timezone.utc)
        return [
            pkg for pkg in payload.packages
            if pkg.target_role == role
            and pkg.remaining_count > 0
            and not _is_expired(pkg, now)
        ]

    async def apply_package(self, booking_id: str, package_id: str, applied_hours: Number) -> bool:
        """Record package usage on a booking. Raises PackageApplicationError on any failure."""
        body = {
            "bookingId": booking_id,
            "packageId": package_id,
            "appliedHours": float(to_decimal(applied_hours)),
        }
        try:
            response = await self.client.post("/booking/apply-package", json=body)
        except httpx.HTTPError as e:
            logger.error(f"Error applying package {package_id} to booking {booking_id}: {e}")
            raise PackageApplicationError(booking_id, package_id, str(e)) from e

        data = _json_or_empty(response)
        if response.is_error or not data.get("success"):
            message = data.get("message") or "Failed to apply package"
            logger.error(f"Error applying package {package_id} to booking {booking_id}: {message}")
            raise PackageApplicationError(booking_id, package_id, message)

        logger.info(f"Applied package {package_id} to booking {booking_id} ({applied_hours}h)")
        return True


def _is_expired(package: UserPackage, now: datetime) -> bool:
    if package.expires_at is None:
        return False
    expires_at = package.expires_at
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return expires_at <= now


def _json_or_empty(response: httpx.Response) -> dict:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


async def quote_booking(
    package_client: PackageClient,
    user_id: str,
    user_role: Union[TargetRole, str],
    individual_hours: Number,
    total_people: int,
    hourly_rate: Optional[Number] = None
) -> Tuple[BookingCalculation, bool]:
    """Fetch the user's packages and price the booking against them"""
    rate = get_hourly_rate(user_role) if hourly_rate is None else hourly_rate
    packages = await package_client.get_user_packages(user_id, user_role)
    calculation = calculate_package_discount(
        individual_hours, total_people, packages, user_role, rate
    )
    return calculation, bool(packages)
