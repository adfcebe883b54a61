"""
Booking backend HTTP client and service dependencies
"""

from typing import Optional
import logging

import httpx

from productive_space.config import settings
from productive_space.services.package_service import PackageClient
from productive_space.services.payment_service import PaymentSettingsService
from productive_space.services.pricing_service import PricingService

logger = logging.getLogger(__name__)

# Global backend client
backend_client: Optional[httpx.AsyncClient] = None
payment_settings_service: Optional[PaymentSettingsService] = None


async def init_backend_client():
    """
    Initialize the shared backend client
    """
    global backend_client, payment_settings_service
    backend_client = httpx.AsyncClient(
        base_url=settings.BACKEND_BASE_URL,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        headers={"Content-Type": "application/json"}
    )
    payment_settings_service = PaymentSettingsService(backend_client)
    logger.info(f"Backend client ready for {settings.BACKEND_BASE_URL}")


async def close_backend_client():
    """
    Close the shared backend client
    """
    global backend_client, payment_settings_service
    if backend_client:
        await backend_client.aclose()
        logger.info("Backend client closed")
    backend_client = None
    payment_settings_service = None


async def get_backend_client() -> httpx.AsyncClient:
    if backend_client is None:
        await init_backend_client()
    return backend_client


async def get_package_client() -> PackageClient:
    return PackageClient(await get_backend_client())


async def get_pricing_service() -> PricingService:
    return PricingService(await get_backend_client())


async def get_payment_settings_service() -> PaymentSettingsService:
    # One instance so the settings cache outlives a single request
    await get_backend_client()
    return payment_settings_service
