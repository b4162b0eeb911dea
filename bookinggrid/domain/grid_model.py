"""
Construction and addressing of week grids.

Pure domain logic: every instant is passed in explicitly, nothing here reads
the current time or touches I/O.
"""

from typing import List

from pendulum import DateTime

from .exceptions import InvalidWeekStart
from .models import DAYS_PER_WEEK, GridConfig, SlotDescriptor, WeekGrid


def slots_per_day(config: GridConfig) -> int:
    """Number of time-of-day rows in a grid built from ``config``."""
    return config.slots_per_day()


def total_slots(config: GridConfig) -> int:
    """Number of slots in a full week built from ``config``."""
    return config.total_slots()


class GridModel:
    """
    Builds week grids and maps instants back to the slots that hold them.

    Algorithm for ``build_week``:
    1. Validate the week start (aware, at midnight)
    2. Walk the time-of-day rows 0..slots_per_day
    3. For every row emit one slot per day offset 0..6

    The resulting order is row-major (rows = time, columns = days), which is
    how a calendar table is laid out.
    """

    def __init__(self, config: GridConfig):
        self.config = config

    def build_week(self, week_start: DateTime) -> WeekGrid:
        """
        Build the grid for the week starting at ``week_start``.

        Args:
            week_start: First displayed day, at a day boundary. Whether that
                day is a Monday is up to the caller.

        Returns:
            WeekGrid holding ``total_slots(config)`` slots

        Raises:
            InvalidWeekStart: If ``week_start`` is naive or not at midnight
        """
        self._validate_week_start(week_start)

        resolution = self.config.slot_resolution_minutes
        openings = [
            week_start.add(days=day_offset, hours=self.config.start_hour)
            for day_offset in range(DAYS_PER_WEEK)
        ]

        slots: List[SlotDescriptor] = []
        for slot_index in range(self.config.slots_per_day()):
            for day_offset, opening in enumerate(openings):
                slots.append(
                    SlotDescriptor(
                        day_offset=day_offset,
                        slot_index=slot_index,
                        instant=opening.add(minutes=slot_index * resolution),
                    )
                )

        return WeekGrid(week_start=week_start, config=self.config, slots=tuple(slots))

    def locate_slot(self, grid: WeekGrid, instant: DateTime) -> SlotDescriptor | None:
        """
        Find the slot starting exactly at ``instant``.

        Returns None (not in grid) when the instant lies outside the week,
        outside operating hours on its day, or between two slot boundaries.
        """
        if not grid.week_start <= instant < grid.week_end:
            return None

        local = instant.astimezone(grid.week_start.tzinfo)
        day_offset = (local.date() - grid.week_start.date()).days
        if not 0 <= day_offset < DAYS_PER_WEEK:
            return None

        opening = grid.slot_at(day_offset, 0).instant
        offset_seconds = (instant - opening).total_seconds()
        if offset_seconds < 0 or offset_seconds >= grid.config.operating_minutes() * 60:
            return None

        # Strict alignment: an off-grid instant must never round onto a slot.
        resolution_seconds = grid.config.slot_resolution_minutes * 60
        if offset_seconds % resolution_seconds:
            return None

        return grid.slot_at(day_offset, int(offset_seconds // resolution_seconds))

    @staticmethod
    def _validate_week_start(week_start: DateTime) -> None:
        if week_start.tzinfo is None:
            raise InvalidWeekStart(f"Week start {week_start} has no timezone")
        if (week_start.hour, week_start.minute, week_start.second, week_start.microsecond) != (0, 0, 0, 0):
            raise InvalidWeekStart(f"Week start {week_start} is not at a day boundary")


def build_week(week_start: DateTime, config: GridConfig) -> WeekGrid:
    """Build the week grid for ``config`` starting at ``week_start``."""
    return GridModel(config).build_week(week_start)


def locate_slot(grid: WeekGrid, instant: DateTime) -> SlotDescriptor | None:
    """Locate ``instant`` within ``grid``; None when it is not in the grid."""
    return GridModel(grid.config).locate_slot(grid, instant)
