"""
Application service for the weekly booking calendar.

The service coordinates the booking repository with the domain-level
``GridModel`` and ``BookingPlacer``. Callers get immutable ``WeekView``
values back; every change produces a new view.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

from pendulum import DateTime

from ..domain.booking_placer import BookingPlacer, PlacementReport
from ..domain.grid_model import GridModel
from ..domain.models import Booking, SlotAssignment, SlotDescriptor, WeekGrid

logger = logging.getLogger(__name__)


class BookingRepositoryProtocol(Protocol):
    """Protocol describing the booking storage behaviour needed by the service."""

    async def create_booking(
        self,
        owner: str,
        start: DateTime,
        duration_minutes: int,
        note: str = "",
    ) -> Booking:
        """Persist a booking and return it with its durable id."""

    async def list_bookings(self) -> List[Booking]:
        """Return all known bookings."""


@dataclass(frozen=True)
class WeekView:
    """A built week grid together with the bookings assigned to it."""
    grid: WeekGrid
    assignment: SlotAssignment
    rejected: Tuple[Booking, ...] = ()

    def booking_at(self, slot: SlotDescriptor) -> Booking | None:
        return self.assignment.get(slot.instant)


class BookingCalendarService:
    """
    Orchestrates grid construction, booking retrieval and placement.

    The repository is reached through a protocol so tests can pass a stub
    and the CLI can pass the in-memory adapter.
    """

    def __init__(
        self,
        repository: BookingRepositoryProtocol,
        grid_model: GridModel,
        default_duration_minutes: int,
    ) -> None:
        self._repository = repository
        self._grid_model = grid_model
        self._placer = BookingPlacer()
        self._default_duration_minutes = default_duration_minutes

    async def switch_to_week(self, week_start: DateTime) -> WeekView:
        """
        Build the grid for ``week_start`` and place that week's bookings.
        """
        grid = self._grid_model.build_week(week_start)
        bookings = await self._repository.list_bookings()
        report = self.place_bookings(grid, bookings)
        return WeekView(
            grid=grid,
            assignment=report.assignment,
            rejected=tuple(booking for booking, _ in report.rejected),
        )

    def place_bookings(self, grid: WeekGrid, bookings: List[Booking]) -> PlacementReport:
        """Place all bookings of the grid's week onto a fresh assignment."""
        return self._placer.assignment_for_week(grid, bookings)

    async def book(
        self,
        view: WeekView,
        *,
        owner: str,
        start: DateTime,
        note: str = "",
        duration_minutes: Optional[int] = None,
    ) -> Tuple[WeekView, Booking]:
        """
        Create a booking and reflect it into ``view``.

        Placement is checked before the repository is called, so a booking
        that cannot be shown in this week is never persisted.

        Raises:
            PlacementError: If the booking does not fit the grid
        """
        duration = self._default_duration_minutes if duration_minutes is None else duration_minutes
        self._placer.slots_for(start, duration, view.grid)

        booking = await self._repository.create_booking(
            owner=owner,
            start=start,
            duration_minutes=duration,
            note=note,
        )
        return self.apply_booking(view, booking), booking

    def apply_booking(self, view: WeekView, booking: Booking) -> WeekView:
        """
        Reflect an already persisted booking into ``view``.

        Applying the same booking again returns an equal view.
        """
        slots = self._placer.slots_for_booking(booking, view.grid)
        assignment = self._placer.assign(view.assignment, booking, slots)
        logger.debug("Booking %s now occupies %d slot(s)", booking.id, len(slots))
        return WeekView(grid=view.grid, assignment=assignment, rejected=view.rejected)
