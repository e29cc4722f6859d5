"""Reservation and room status enums.

Both are closed sets. Every member must appear in the classification maps
below; tests fail if one is added without being classified.
"""

from __future__ import annotations

from enum import Enum


class ReservationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"
    CANCELLED = "cancelled"


class RoomStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"
    CLEANING = "cleaning"


# Whether a reservation in this status occupies the room.
_BLOCKING: dict[ReservationStatus, bool] = {
    ReservationStatus.PENDING: True,
    ReservationStatus.CONFIRMED: True,
    ReservationStatus.CHECKED_IN: True,
    ReservationStatus.CHECKED_OUT: False,
    ReservationStatus.CANCELLED: False,
}

# Whether the room status is set by housekeeping rather than derived from bookings.
_MANUAL: dict[RoomStatus, bool] = {
    RoomStatus.AVAILABLE: False,
    RoomStatus.OCCUPIED: False,
    RoomStatus.MAINTENANCE: True,
    RoomStatus.CLEANING: True,
}

BLOCKING_STATUSES: tuple[ReservationStatus, ...] = tuple(
    status for status, blocking in _BLOCKING.items() if blocking
)


def is_blocking(status: ReservationStatus | str) -> bool:
    """Return True if a reservation in ``status`` occupies its room.

    Raises:
        ValueError: If ``status`` is not a known reservation status.
    """
    return _BLOCKING[ReservationStatus(status)]


def is_manual(status: RoomStatus | str) -> bool:
    """Return True for room statuses owned by the housekeeping workflow."""
    return _MANUAL[RoomStatus(status)]
