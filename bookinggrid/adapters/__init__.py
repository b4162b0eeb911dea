"""
Adapters layer - Booking storage integrations.
"""

from .memory_repository import InMemoryBookingRepository

__all__ = ["InMemoryBookingRepository"]
