"""
In-memory booking repository for local use and tests.
"""

import json
import logging
import uuid
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import pendulum
from pendulum import DateTime

from ..domain.models import Booking

logger = logging.getLogger(__name__)


class InMemoryBookingRepository:
    """
    Stores bookings in a list owned by this repository.

    Optionally seeded from a JSON file holding a list of objects with
    ``start``, ``durationMinutes``, ``owner`` and optional ``id``/``note``
    keys. Invalid entries are logged and skipped.
    """

    def __init__(
        self,
        bookings: Iterable[Booking] = (),
        timezone: str = "UTC",
        seed_file: Optional[Path] = None,
    ):
        self.timezone = timezone
        self._bookings: List[Booking] = list(bookings)
        if seed_file is not None:
            self._bookings.extend(self._load_seed_file(seed_file))

    def _load_seed_file(self, seed_file: Path) -> List[Booking]:
        """Load bookings from a JSON seed file."""
        if not seed_file.exists():
            raise FileNotFoundError(f"Bookings file not found: {seed_file}")

        with open(seed_file, "r", encoding="utf-8") as f:
            try:
                entries = json.load(f)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid JSON in {seed_file}: {exc}") from exc

        if not isinstance(entries, list):
            raise ValueError("Bookings file must contain a list at the root level.")

        bookings: List[Booking] = []
        for entry in entries:
            try:
                bookings.append(self._booking_from_entry(entry))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping invalid booking entry %r: %s", entry, exc)
        return bookings

    def _booking_from_entry(self, entry: Dict) -> Booking:
        return Booking(
            id=str(entry.get("id") or uuid.uuid4()),
            start=pendulum.parse(entry["start"], tz=self.timezone),
            duration_minutes=int(entry["durationMinutes"]),
            owner=entry["owner"],
            note=entry.get("note", ""),
        )

    async def create_booking(
        self,
        owner: str,
        start: DateTime,
        duration_minutes: int,
        note: str = "",
    ) -> Booking:
        """Persist a new booking and return it with a fresh id."""
        booking = Booking(
            id=str(uuid.uuid4()),
            start=start,
            duration_minutes=duration_minutes,
            owner=owner,
            note=note,
        )
        self._bookings.append(booking)
        logger.info("Stored booking %s for %s at %s", booking.id, owner, start)
        return booking

    async def list_bookings(self) -> List[Booking]:
        """Return a snapshot of all stored bookings."""
        return list(self._bookings)
