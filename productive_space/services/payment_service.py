"""
Payment fee calculations and payment settings retrieval
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Callable, Dict, Optional, Union
import logging
import time

import httpx

from productive_space.config import settings
from productive_space.core.exceptions import ValidationError
from productive_space.schemas.payment import PaymentMethod, PaymentSettings, PaymentTotal

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """Convert to Decimal going through str so floats keep their shortest repr"""
    if isinstance(value, Decimal):
        converted = value
    else:
        try:
            converted = Decimal(str(value))
        except InvalidOperation:
            raise ValidationError(f"Not a number: {value!r}")
    if not converted.is_finite():
        raise ValidationError(f"Not a finite number: {value!r}")
    return converted


def round_currency(value: Number) -> Decimal:
    """Round to cents, halves away from zero (2.925 -> 2.93)"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(amount: Number) -> str:
    return f"{round_currency(amount):.2f}"


def parse_currency(text: str) -> Decimal:
    cleaned = text.strip().lstrip("$").replace(",", "")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValidationError(f"Invalid currency amount: {text!r}", field="amount")
    if not amount.is_finite():
        raise ValidationError(f"Invalid currency amount: {text!r}", field="amount")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_credit_card_fee(amount: Number, percentage: Optional[Number] = None) -> Decimal:
    if percentage is None:
        percentage = settings.DEFAULT_CREDIT_CARD_FEE_PERCENTAGE
    return round_currency(to_decimal(amount) * to_decimal(percentage) / 100)


def calculate_paynow_fee(amount: Number, flat_fee: Optional[Number] = None) -> Decimal:
    """PayNow charges a flat fee, only on small amounts"""
    if to_decimal(amount) >= to_decimal(settings.PAYNOW_FEE_THRESHOLD):
        return Decimal("0.00")
    if flat_fee is None:
        flat_fee = settings.DEFAULT_PAYNOW_FEE
    return round_currency(flat_fee)


def calculate_payment_total(
    base_amount: Number,
    method: Union[PaymentMethod, str],
    payment_settings: Optional[PaymentSettings] = None
) -> PaymentTotal:
    payment_settings = payment_settings or default_payment_settings()
    method = PaymentMethod(method)
    amount = to_decimal(base_amount)
    fee_percentage = None

    if method == PaymentMethod.PAYNOW:
        fee = calculate_paynow_fee(amount, payment_settings.paynow_transaction_fee)
    else:
        fee_percentage = payment_settings.credit_card_fee_percentage
        fee = calculate_credit_card_fee(amount, fee_percentage)

    return PaymentTotal(
        base_amount=amount,
        transaction_fee=fee,
        total_amount=round_currency(amount + fee),
        fee_percentage=fee_percentage
    )


def default_payment_settings() -> PaymentSettings:
    return PaymentSettings(
        paynow_transaction_fee=to_decimal(settings.DEFAULT_PAYNOW_FEE),
        credit_card_fee_percentage=to_decimal(settings.DEFAULT_CREDIT_CARD_FEE_PERCENTAGE),
        paynow_enabled=True,
        credit_card_enabled=True
    )


@dataclass
class CachedSettings:
    value: PaymentSettings
    fetched_at: float


class PaymentSettingsService:
    """Fetches fee settings from the backend, caching them for a fixed window"""

    SETTING_FIELDS = {
        "PAYNOW_TRANSACTION_FEE": "paynow_transaction_fee",
        "CREDIT_CARD_TRANSACTION_FEE_PERCENTAGE": "credit_card_fee_percentage",
        "PAYNOW_ENABLED": "paynow_enabled",
        "CREDIT_CARD_ENABLED": "credit_card_enabled",
    }

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        self.client = client
        self.cache_seconds = (
            settings.PAYMENT_SETTINGS_CACHE_SECONDS if cache_seconds is None else cache_seconds
        )
        self.clock = clock
        self._cache: Optional[CachedSettings] = None

    async def get_settings(self) -> PaymentSettings:
        now = self.clock()
        if self._cache and now - self._cache.fetched_at < self.cache_seconds:
            return self._cache.value

        try:
            response = await self.client.get("/payment-settings")
            response.raise_for_status()
            result = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error fetching payment settings: {e}")
            return default_payment_settings()

        if not isinstance(result, dict) or not result.get("success") or not result.get("data"):
            logger.warning("Payment settings response had no data, using defaults")
            return default_payment_settings()

        try:
            value = self._parse_settings(result["data"])
        except (ValidationError, ValueError, TypeError, KeyError) as e:
            logger.error(f"Malformed payment settings: {e}")
            return default_payment_settings()

        self._cache = CachedSettings(value=value, fetched_at=now)
        return value

    def _parse_settings(self, rows: list) -> PaymentSettings:
        values: Dict[str, Any] = {}
        for row in rows:
            field = self.SETTING_FIELDS.get(row["settingKey"])
            if field is None:
                continue
            raw = row["settingValue"]
            if row.get("settingType") == "boolean":
                values[field] = raw is True or str(raw).lower() == "true"
            else:
                values[field] = to_decimal(raw)
        return default_payment_settings().model_copy(update=values)

    def clear_cache(self) -> None:
        self._cache = None

    async def is_payment_method_enabled(self, method: Union[PaymentMethod, str]) -> bool:
        current = await self.get_settings()
        if PaymentMethod(method) == PaymentMethod.PAYNOW:
            return current.paynow_enabled
        return current.credit_card_enabled

    async def get_fee_label(self, method: Union[PaymentMethod, str]) -> str:
        current = await self.get_settings()
        if PaymentMethod(method) == PaymentMethod.PAYNOW:
            return f"PayNow Transaction Fee (${format_currency(current.paynow_transaction_fee)})"
        return f"Credit Card Fee ({current.credit_card_fee_percentage}%)"

    async def calculate_total(self, base_amount: Number, method: Union[PaymentMethod, str]) -> PaymentTotal:
        return calculate_payment_total(base_amount, method, await self.get_settings())
