"""
Domain-specific exception hierarchy for the booking grid.
"""

from pendulum import DateTime


class BookingGridError(Exception):
    """Base class for all application-level errors."""


class InvalidConfig(BookingGridError, ValueError):
    """Raised when a grid configuration violates its invariants."""


class InvalidWeekStart(BookingGridError, ValueError):
    """Raised when a week start is not an aware day boundary."""


class PlacementError(BookingGridError):
    """
    Raised when a booking cannot be placed onto a week grid.

    Carries the offending start and duration so callers can report the
    rejected input back to the user.
    """

    def __init__(self, message: str, start: DateTime | None = None, duration_minutes: int | None = None):
        super().__init__(message)
        self.start = start
        self.duration_minutes = duration_minutes


class MisalignedDuration(PlacementError):
    """Duration is not a positive multiple of the slot resolution."""


class OutOfRange(PlacementError):
    """Booking start is outside the displayed week or operating hours, or off-grid."""


class CrossesDayBoundary(PlacementError):
    """Booking would run past the last slot of its day."""
