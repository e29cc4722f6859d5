"""Shared test helpers for roomkeeper tests.

Plain functions and classes (not fixtures) importable from conftest.py and
test modules.
"""

from __future__ import annotations

from datetime import date

from roomkeeper.domain.errors import DataFetchError, StatusWriteError
from roomkeeper.domain.models import Reservation, Room
from roomkeeper.domain.statuses import RoomStatus

PROPERTY = "Sea View"


def make_reservation(
    reservation_id: str,
    check_in: date | str,
    check_out: date | str,
    status: str = "confirmed",
    room_number: str = "101",
    property_key: str = PROPERTY,
) -> Reservation:
    return Reservation(
        id=reservation_id,
        check_in=check_in,
        check_out=check_out,
        status=status,
        property_key=property_key,
        room_number=room_number,
    )


class FakeReservationStore:
    """In-memory ReservationStore that records calls."""

    def __init__(
        self,
        reservations: list[Reservation] | None = None,
        rooms: list[Room] | None = None,
    ) -> None:
        self.reservations = list(reservations or [])
        self.rooms = {room.id: room for room in rooms or []}
        self.fetch_calls: list[tuple[str, str]] = []
        self.status_writes: list[tuple[str, RoomStatus]] = []
        self.fail_fetch = False
        self.fail_write_for: set[str] = set()

    def fetch_reservations_for_room(self, property_key: str, room_number: str) -> list[Reservation]:
        self.fetch_calls.append((property_key, room_number))
        if self.fail_fetch:
            raise DataFetchError(property_key, room_number)
        return [
            r
            for r in self.reservations
            if r.property_key == property_key and r.room_number == room_number
        ]

    def fetch_bookings_for_room(self, property_key: str, room_number: str) -> list[Reservation]:
        return self.fetch_reservations_for_room(property_key, room_number)

    def update_room_status(self, room_id: str, status: RoomStatus) -> None:
        if room_id in self.fail_write_for:
            raise StatusWriteError(room_id, RoomStatus(status).value)
        self.status_writes.append((room_id, RoomStatus(status)))
        if room_id in self.rooms:
            room = self.rooms[room_id]
            self.rooms[room_id] = Room(room.id, room.number, room.property_key, RoomStatus(status))

    def list_rooms(self) -> list[Room]:
        if self.fail_fetch:
            raise DataFetchError(None, None)
        return list(self.rooms.values())
