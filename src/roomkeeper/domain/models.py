"""Reservation and room records as seen by the availability engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

from roomkeeper.domain.statuses import ReservationStatus, RoomStatus


@dataclass(frozen=True)
class RoomKey:
    """Natural key of a physical room: the booking's property plus room number.

    Bookings reference rooms by these two strings rather than by room id.
    """

    property_key: str
    room_number: str

    def __str__(self) -> str:
        return f"{self.property_key}/{self.room_number}"


@dataclass(frozen=True)
class Reservation:
    """Booking fields relevant to availability.

    Dates are kept as received (date, datetime or ISO string); they are
    normalised by ``roomkeeper.domain.intervals.to_interval``.
    """

    id: str
    check_in: date | datetime | str
    check_out: date | datetime | str
    status: ReservationStatus | str
    property_key: str | None = None
    room_number: str | None = None


@dataclass(frozen=True)
class Room:
    id: str
    number: str
    property_key: str
    status: RoomStatus | str | None

    @property
    def key(self) -> RoomKey:
        return RoomKey(self.property_key, self.number)


class ReservationStore(Protocol):
    """Persistence collaborator consumed by the engine."""

    def fetch_reservations_for_room(
        self, property_key: str, room_number: str
    ) -> list[Reservation]:
        """Return the blocking reservations of one room. Raises DataFetchError."""
        ...

    def fetch_bookings_for_room(
        self, property_key: str, room_number: str
    ) -> list[Reservation]:
        """Return every reservation of one room, any status. Raises DataFetchError."""
        ...

    def update_room_status(self, room_id: str, status: RoomStatus) -> None:
        """Persist a room status. Raises StatusWriteError."""
        ...

    def list_rooms(self) -> list[Room]:
        """Return all rooms. Raises DataFetchError."""
        ...
