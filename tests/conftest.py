"""
Shared fixtures for grid and placement tests.
"""

import pendulum
import pytest

from bookinggrid.domain.grid_model import GridModel
from bookinggrid.domain.models import Booking, GridConfig


@pytest.fixture
def config() -> GridConfig:
    return GridConfig(start_hour=9, end_hour=17, slot_resolution_minutes=30)


@pytest.fixture
def monday():
    return pendulum.parse("2024-11-25 00:00", tz="UTC")


@pytest.fixture
def grid(config, monday):
    return GridModel(config).build_week(monday)


@pytest.fixture
def make_booking():
    """Factory for bookings starting at a UTC wall-clock time."""
    def _make(start: str, duration_minutes: int, booking_id: str = "b-1", owner: str = "alice") -> Booking:
        return Booking(
            id=booking_id,
            start=pendulum.parse(start, tz="UTC"),
            duration_minutes=duration_minutes,
            owner=owner,
        )
    return _make
