"""
Domain models for the week grid, its slots and the bookings placed on it.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import time
from typing import Dict, Iterable, List, Sequence, Tuple

import pendulum
from pendulum import DateTime

from .exceptions import InvalidConfig

DAYS_PER_WEEK = 7
MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True)
class GridConfig:
    """
    Operating hours and slot resolution of the calendar grid.

    Invariants: 0 <= start_hour < end_hour <= 24, and the resolution is a
    positive divisor of both the operating span and a full day.
    """
    start_hour: int
    end_hour: int
    slot_resolution_minutes: int

    def __post_init__(self):
        if not 0 <= self.start_hour < self.end_hour <= 24:
            raise InvalidConfig(
                f"Operating hours must satisfy 0 <= start < end <= 24, "
                f"got {self.start_hour}-{self.end_hour}"
            )
        if self.slot_resolution_minutes <= 0:
            raise InvalidConfig(
                f"Slot resolution must be positive, got {self.slot_resolution_minutes}"
            )
        if self.operating_minutes() % self.slot_resolution_minutes:
            raise InvalidConfig(
                f"Slot resolution {self.slot_resolution_minutes} does not divide "
                f"the operating span of {self.operating_minutes()} minutes"
            )
        if MINUTES_PER_DAY % self.slot_resolution_minutes:
            raise InvalidConfig(
                f"Slot resolution {self.slot_resolution_minutes} does not divide a day"
            )

    def operating_minutes(self) -> int:
        """Return the length of one operating day in minutes."""
        return (self.end_hour - self.start_hour) * 60

    def slots_per_day(self) -> int:
        return self.operating_minutes() // self.slot_resolution_minutes

    def total_slots(self) -> int:
        return DAYS_PER_WEEK * self.slots_per_day()

    def time_of_day(self, slot_index: int) -> time:
        """Wall-clock start of a time-of-day row, the same on every day."""
        minutes = self.start_hour * 60 + slot_index * self.slot_resolution_minutes
        return time(hour=minutes // 60, minute=minutes % 60)


def slot_key(instant: DateTime) -> str:
    """Serialize a slot instant into its stable ISO-8601 join key."""
    return instant.to_iso8601_string()


def parse_slot_key(key: str) -> DateTime:
    """Parse a join key produced by ``slot_key`` back into an instant."""
    return pendulum.parse(key)


@dataclass(frozen=True)
class SlotDescriptor:
    """
    One addressable cell of a week grid.

    ``instant`` is the absolute start of the slot and is unique within its grid.
    """
    day_offset: int
    slot_index: int
    instant: DateTime

    @property
    def key(self) -> str:
        return slot_key(self.instant)

    def __str__(self) -> str:
        return f"day {self.day_offset} #{self.slot_index} ({self.instant.format('ddd DD.MM.YYYY HH:mm')})"


@dataclass(frozen=True)
class WeekGrid:
    """
    The slot structure of one displayed week.

    Slots are stored row-major: all days of the first time-of-day row, then
    all days of the second row, and so on.
    """
    week_start: DateTime
    config: GridConfig
    slots: Tuple[SlotDescriptor, ...]

    @property
    def week_end(self) -> DateTime:
        """Exclusive end of the week."""
        return self.week_start.add(days=DAYS_PER_WEEK)

    def __iter__(self) -> Iterator[SlotDescriptor]:
        return iter(self.slots)

    def __len__(self) -> int:
        return len(self.slots)

    def slot_at(self, day_offset: int, slot_index: int) -> SlotDescriptor:
        """Address a slot by its (day, time-of-day) coordinates."""
        if not 0 <= day_offset < DAYS_PER_WEEK:
            raise IndexError(f"day_offset out of range: {day_offset}")
        if not 0 <= slot_index < self.config.slots_per_day():
            raise IndexError(f"slot_index out of range: {slot_index}")
        return self.slots[slot_index * DAYS_PER_WEEK + day_offset]

    def day_start(self, day_offset: int) -> DateTime:
        return self.week_start.add(days=day_offset)

    def days(self) -> List[DateTime]:
        """Start of each displayed day, offsets 0..6, for header labels."""
        return [self.day_start(offset) for offset in range(DAYS_PER_WEEK)]

    def rows(self) -> List[Tuple[SlotDescriptor, ...]]:
        """Group slots into time-of-day rows of seven days each."""
        return [
            self.slots[start:start + DAYS_PER_WEEK]
            for start in range(0, len(self.slots), DAYS_PER_WEEK)
        ]


@dataclass(frozen=True)
class Booking:
    """
    A persisted booking handed over by the storage collaborator.
    """
    id: str
    start: DateTime
    duration_minutes: int
    owner: str
    note: str = ""

    def __post_init__(self):
        if self.duration_minutes <= 0:
            raise ValueError(f"Booking duration must be positive, got {self.duration_minutes}")

    @property
    def end(self) -> DateTime:
        return self.start.add(minutes=self.duration_minutes)


class SlotAssignment(Mapping):
    """
    Immutable mapping from slot instant to the booking occupying it.

    Several instants may map to the same booking. Lookups of an empty slot
    raise ``KeyError`` like any mapping; use ``get`` for optional access.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping | Iterable[Tuple[DateTime, Booking]] = ()):
        self._entries: Dict[DateTime, Booking] = dict(entries)

    def __getitem__(self, instant: DateTime) -> Booking:
        return self._entries[instant]

    def __iter__(self) -> Iterator[DateTime]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SlotAssignment({self._entries!r})"

    def with_booking(self, booking: Booking, slots: Sequence[SlotDescriptor]) -> "SlotAssignment":
        """Return a new assignment with every slot mapped to ``booking``."""
        entries = dict(self._entries)
        for slot in slots:
            entries[slot.instant] = booking
        return SlotAssignment(entries)

    def bookings(self) -> List[Booking]:
        """Distinct bookings in order of their first occupied slot."""
        seen: Dict[str, Booking] = {}
        for instant in sorted(self._entries):
            booking = self._entries[instant]
            seen.setdefault(booking.id, booking)
        return list(seen.values())
