"""
Domain layer - Pure grid and placement logic without external dependencies.
"""

from .booking_placer import BookingPlacer, PlacementReport, WeekBookings
from .exceptions import (
    BookingGridError,
    CrossesDayBoundary,
    InvalidConfig,
    InvalidWeekStart,
    MisalignedDuration,
    OutOfRange,
    PlacementError,
)
from .grid_model import GridModel, slots_per_day, total_slots
from .models import Booking, GridConfig, SlotAssignment, SlotDescriptor, WeekGrid, parse_slot_key, slot_key

__all__ = [
    "Booking",
    "BookingGridError",
    "BookingPlacer",
    "CrossesDayBoundary",
    "GridConfig",
    "GridModel",
    "InvalidConfig",
    "InvalidWeekStart",
    "MisalignedDuration",
    "OutOfRange",
    "PlacementError",
    "PlacementReport",
    "SlotAssignment",
    "SlotDescriptor",
    "WeekBookings",
    "WeekGrid",
    "parse_slot_key",
    "slot_key",
    "slots_per_day",
    "total_slots",
]
