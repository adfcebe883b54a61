"""
Payment fee endpoints
"""

from fastapi import APIRouter, Depends

from productive_space.core.backend import get_payment_settings_service
from productive_space.schemas.payment import PaymentMethod, PaymentTotal, PaymentTotalRequest
from productive_space.services.payment_service import PaymentSettingsService

router = APIRouter()


@router.post("/total", response_model=PaymentTotal)
async def payment_total(
    request: PaymentTotalRequest,
    settings_service: PaymentSettingsService = Depends(get_payment_settings_service)
) -> PaymentTotal:
    """Fee and total for a base amount and payment method"""
    return await settings_service.calculate_total(request.amount, request.method)


@router.get("/fee-label/{method}")
async def fee_label(
    method: PaymentMethod,
    settings_service: PaymentSettingsService = Depends(get_payment_settings_service)
):
    """Fee description shown next to a payment method"""
    return {
        "method": method.value,
        "label": await settings_service.get_fee_label(method),
        "enabled": await settings_service.is_payment_method_enabled(method)
    }
