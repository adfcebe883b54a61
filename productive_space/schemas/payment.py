"""
Payment schemas for request/response models
"""

from typing import Optional
from decimal import Decimal
from pydantic import BaseModel, Field
import enum


class PaymentMethod(str, enum.Enum):
    PAYNOW = "paynow"
    CREDIT_CARD = "credit_card"

    @classmethod
    def _missing_(cls, value):
        # Frontend sends "creditCard" as well as "credit_card"
        if isinstance(value, str):
            normalized = value.lower().replace("_", "")
            for member in cls:
                if member.value.replace("_", "") == normalized:
                    return member
        return None


class PaymentSettings(BaseModel):
    paynow_transaction_fee: Decimal = Decimal("0.20")
    credit_card_fee_percentage: Decimal = Decimal("5.0")
    paynow_enabled: bool = True
    credit_card_enabled: bool = True


class PaymentTotal(BaseModel):
    base_amount: Decimal
    transaction_fee: Decimal
    total_amount: Decimal
    fee_percentage: Optional[Decimal] = None


class PaymentTotalRequest(BaseModel):
    amount: Decimal = Field(..., ge=0)
    method: PaymentMethod
