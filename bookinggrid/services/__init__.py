"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .booking_calendar import BookingCalendarService, BookingRepositoryProtocol, WeekView

__all__ = ["BookingCalendarService", "BookingRepositoryProtocol", "WeekView"]
