"""
API endpoints module
"""

from . import seat_maps, bookings, payment, health

__all__ = [
    "seat_maps",
    "bookings",
    "payment",
    "health"
]
