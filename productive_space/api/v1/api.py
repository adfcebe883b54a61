"""
Main API Router
Aggregates all API endpoints for v1
"""

from fastapi import APIRouter
from productive_space.api.v1.endpoints import (
    seat_maps,
    bookings,
    payment,
    health
)

api_router = APIRouter()

# Include all routers
api_router.include_router(seat_maps.router, prefix="/seat-maps", tags=["seat maps"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(payment.router, prefix="/payments", tags=["payments"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
