"""
Health check endpoints
"""

from typing import Any
from fastapi import APIRouter, Depends
import httpx

from productive_space.core.backend import get_backend_client
from productive_space.config import settings

router = APIRouter()


@router.get("/live")
async def liveness() -> Any:
    """
    Kubernetes liveness probe
    """
    return {"status": "alive", "service": "productive-space-api"}


@router.get("/ready")
async def readiness(
    client: httpx.AsyncClient = Depends(get_backend_client)
) -> Any:
    """
    Kubernetes readiness probe - checks the booking backend answers
    """
    checks = {
        "backend": False,
        "api": True
    }

    try:
        response = await client.get("/payment-settings")
        checks["backend"] = response.status_code < 500
    except httpx.HTTPError:
        pass

    all_healthy = all(checks.values())

    return {
        "status": "ready" if all_healthy else "not ready",
        "checks": checks,
        "version": settings.APP_VERSION
    }
