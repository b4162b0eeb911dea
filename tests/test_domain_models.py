"""
Tests for domain models.
"""

from datetime import time

import pendulum
import pytest

from bookinggrid.domain.exceptions import InvalidConfig
from bookinggrid.domain.models import (
    Booking,
    GridConfig,
    SlotAssignment,
    SlotDescriptor,
    parse_slot_key,
    slot_key,
)


class TestGridConfig:
    """Tests for GridConfig invariants."""

    def test_slot_counts(self):
        """Test slots per day and per week for a 9-17 grid of 30 minutes."""
        config = GridConfig(start_hour=9, end_hour=17, slot_resolution_minutes=30)

        assert config.slots_per_day() == 16
        assert config.total_slots() == 112

    def test_full_day_grid(self):
        """Test that a 0-24 grid is accepted."""
        config = GridConfig(start_hour=0, end_hour=24, slot_resolution_minutes=60)

        assert config.slots_per_day() == 24

    @pytest.mark.parametrize(
        "start_hour, end_hour",
        [(17, 9), (9, 9), (-1, 10), (9, 25)],
    )
    def test_invalid_hours_raise(self, start_hour, end_hour):
        """Test that hours outside 0 <= start < end <= 24 are rejected."""
        with pytest.raises(InvalidConfig, match="Operating hours"):
            GridConfig(start_hour=start_hour, end_hour=end_hour, slot_resolution_minutes=30)

    def test_non_positive_resolution_raises(self):
        with pytest.raises(InvalidConfig, match="must be positive"):
            GridConfig(start_hour=9, end_hour=17, slot_resolution_minutes=0)

    def test_resolution_must_divide_span(self):
        """Test that 9-17 cannot be tiled by 50 minute slots."""
        with pytest.raises(InvalidConfig, match="operating span"):
            GridConfig(start_hour=9, end_hour=17, slot_resolution_minutes=50)

    def test_resolution_must_divide_day(self):
        """Test that 9-16 (420 min) with 105 minute slots is rejected for the day."""
        with pytest.raises(InvalidConfig, match="does not divide a day"):
            GridConfig(start_hour=9, end_hour=16, slot_resolution_minutes=105)

    def test_invalid_config_is_value_error(self):
        with pytest.raises(ValueError):
            GridConfig(start_hour=9, end_hour=17, slot_resolution_minutes=7)


class TestBooking:
    """Tests for Booking model."""

    def test_end(self):
        booking = Booking(
            id="b-1",
            start=pendulum.parse("2024-11-25 09:00", tz="UTC"),
            duration_minutes=90,
            owner="alice",
        )

        assert booking.end == pendulum.parse("2024-11-25 10:30", tz="UTC")
        assert booking.note == ""

    @pytest.mark.parametrize("duration", [0, -30])
    def test_non_positive_duration_raises(self, duration):
        with pytest.raises(ValueError, match="must be positive"):
            Booking(
                id="b-1",
                start=pendulum.parse("2024-11-25 09:00", tz="UTC"),
                duration_minutes=duration,
                owner="alice",
            )


class TestSlotKey:
    """Tests for the serialized slot instant."""

    def test_round_trip(self):
        """Test parse(serialize(instant)) == instant."""
        instant = pendulum.parse("2024-11-25 09:30", tz="Europe/Berlin")

        assert parse_slot_key(slot_key(instant)) == instant

    def test_descriptor_key(self):
        instant = pendulum.parse("2024-11-25 09:30", tz="UTC")
        slot = SlotDescriptor(day_offset=0, slot_index=1, instant=instant)

        assert slot.key == slot_key(instant)
        assert parse_slot_key(slot.key) == slot.instant


class TestSlotAssignment:
    """Tests for the immutable slot assignment mapping."""

    def test_empty_lookup(self):
        assignment = SlotAssignment()
        instant = pendulum.parse("2024-11-25 09:00", tz="UTC")

        assert len(assignment) == 0
        assert assignment.get(instant) is None
        assert instant not in assignment

    def test_with_booking_returns_new_mapping(self):
        """Test that with_booking leaves the original assignment untouched."""
        start = pendulum.parse("2024-11-25 09:00", tz="UTC")
        booking = Booking(id="b-1", start=start, duration_minutes=60, owner="alice")
        slots = [
            SlotDescriptor(day_offset=0, slot_index=0, instant=start),
            SlotDescriptor(day_offset=0, slot_index=1, instant=start.add(minutes=30)),
        ]
        empty = SlotAssignment()

        updated = empty.with_booking(booking, slots)

        assert len(empty) == 0
        assert len(updated) == 2
        assert updated[start] == booking
        assert updated[start.add(minutes=30)] == booking
        assert updated.bookings() == [booking]

    def test_equality_is_mapping_equality(self):
        start = pendulum.parse("2024-11-25 09:00", tz="UTC")
        booking = Booking(id="b-1", start=start, duration_minutes=30, owner="alice")

        assert SlotAssignment({start: booking}) == SlotAssignment([(start, booking)])
        assert SlotAssignment({start: booking}) != SlotAssignment()


class TestTimeOfDay:
    """Tests for GridConfig.time_of_day row labels."""

    def test_row_labels(self):
        config = GridConfig(start_hour=9, end_hour=17, slot_resolution_minutes=30)

        assert config.time_of_day(0) == time(9, 0)
        assert config.time_of_day(1) == time(9, 30)
        assert config.time_of_day(15) == time(16, 30)

    def test_last_row_of_full_day(self):
        config = GridConfig(start_hour=0, end_hour=24, slot_resolution_minutes=15)

        assert config.time_of_day(config.slots_per_day() - 1) == time(23, 45)
