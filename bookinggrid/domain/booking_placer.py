"""
Placement of bookings onto week grids.

A booking of ``duration`` minutes occupies ``duration / resolution``
contiguous slots of a single day, starting at the slot its start instant
addresses.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

from pendulum import DateTime

from .exceptions import CrossesDayBoundary, MisalignedDuration, OutOfRange, PlacementError
from .grid_model import GridModel
from .models import DAYS_PER_WEEK, Booking, SlotAssignment, SlotDescriptor, WeekGrid

logger = logging.getLogger(__name__)


class WeekBookings:
    """
    Lazy view of the bookings whose start falls within one week.

    The interval is half-open, [week_start, week_start + 7 days). Iterating
    again re-runs the filter over the underlying collection.
    """

    def __init__(self, bookings: Iterable[Booking], week_start: DateTime):
        self._bookings = bookings
        self.week_start = week_start
        self.week_end = week_start.add(days=DAYS_PER_WEEK)

    def __iter__(self) -> Iterator[Booking]:
        for booking in self._bookings:
            if self.week_start <= booking.start < self.week_end:
                yield booking


@dataclass(frozen=True)
class PlacementReport:
    """Result of placing a batch of bookings onto one grid."""
    assignment: SlotAssignment
    placed: Tuple[Booking, ...] = ()
    rejected: Tuple[Tuple[Booking, PlacementError], ...] = ()


class BookingPlacer:
    """
    Maps bookings onto the slots of a week grid.

    The k-th occupied slot is the grid slot at ``start + k * resolution``,
    addressed from the start's own slot; the booking itself is never
    modified, so placing the same booking any number of times yields the
    same slots.
    """

    def slots_for_booking(self, booking: Booking, grid: WeekGrid) -> List[SlotDescriptor]:
        """
        Compute the ordered slots ``booking`` occupies in ``grid``.

        Raises:
            MisalignedDuration: Duration is not a positive multiple of the resolution
            OutOfRange: Start is not a slot instant of this grid
            CrossesDayBoundary: The run would pass the last slot of the day
        """
        return self.slots_for(booking.start, booking.duration_minutes, grid)

    def slots_for(self, start: DateTime, duration_minutes: int, grid: WeekGrid) -> List[SlotDescriptor]:
        """
        Placement check for a start/duration pair that has no booking yet.

        Lets callers validate input before handing it to persistence.
        """
        config = grid.config
        resolution = config.slot_resolution_minutes

        if duration_minutes <= 0 or duration_minutes % resolution:
            raise MisalignedDuration(
                f"Duration of {duration_minutes} minutes is not a positive multiple "
                f"of the {resolution} minute slot resolution",
                start=start,
                duration_minutes=duration_minutes,
            )
        slot_count = duration_minutes // resolution

        first = GridModel(grid.config).locate_slot(grid, start)
        if first is None:
            raise OutOfRange(
                f"Start {start.to_iso8601_string()} is not a slot of the week "
                f"beginning {grid.week_start.to_date_string()}",
                start=start,
                duration_minutes=duration_minutes,
            )

        last_index = first.slot_index + slot_count - 1
        if last_index >= config.slots_per_day():
            raise CrossesDayBoundary(
                f"A {duration_minutes} minute booking at {start.format('HH:mm')} "
                f"runs past the {config.end_hour}:00 close",
                start=start,
                duration_minutes=duration_minutes,
            )

        # The grid's own descriptors keep the grid's zone in their keys.
        slots = [grid.slot_at(first.day_offset, first.slot_index + k) for k in range(slot_count)]
        logger.debug("Placed %s+%dmin onto %d slot(s)", start, duration_minutes, slot_count)
        return slots

    @staticmethod
    def assign(
        existing: SlotAssignment,
        booking: Booking,
        slots: Sequence[SlotDescriptor],
    ) -> SlotAssignment:
        """
        Merge ``booking`` into ``existing`` for every slot instant.

        Last write wins; overlapping bookings are not detected here.
        """
        return existing.with_booking(booking, slots)

    @staticmethod
    def bookings_in_week(bookings: Iterable[Booking], week_start: DateTime) -> WeekBookings:
        """Bookings starting within the week that begins at ``week_start``."""
        return WeekBookings(bookings, week_start)

    def assignment_for_week(self, grid: WeekGrid, bookings: Iterable[Booking]) -> PlacementReport:
        """
        Seed a fresh assignment for ``grid`` from a booking collection.

        Bookings that cannot be placed are reported, not silently dropped,
        and do not prevent the rest of the week from being placed.
        """
        assignment = SlotAssignment()
        placed: List[Booking] = []
        rejected: List[Tuple[Booking, PlacementError]] = []

        for booking in self.bookings_in_week(bookings, grid.week_start):
            try:
                slots = self.slots_for_booking(booking, grid)
            except PlacementError as exc:
                logger.warning("Could not place booking %s: %s", booking.id, exc)
                rejected.append((booking, exc))
                continue
            assignment = self.assign(assignment, booking, slots)
            placed.append(booking)

        return PlacementReport(assignment=assignment, placed=tuple(placed), rejected=tuple(rejected))


def slots_for_booking(booking: Booking, grid: WeekGrid) -> List[SlotDescriptor]:
    """Ordered slots ``booking`` occupies in ``grid``."""
    return BookingPlacer().slots_for_booking(booking, grid)


assign = BookingPlacer.assign
bookings_in_week = BookingPlacer.bookings_in_week
