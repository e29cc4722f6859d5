"""Availability engine errors."""

from __future__ import annotations

from datetime import date


class AvailabilityError(Exception):
    """Base class for availability engine errors."""


class InvalidIntervalError(AvailabilityError):
    """A reservation's stored dates are malformed."""

    def __init__(self, reservation_id: str | None, reason: str) -> None:
        self.reservation_id = reservation_id
        self.reason = reason
        super().__init__(f"Reservation {reservation_id} has an invalid stay: {reason}")


class InvalidRangeError(AvailabilityError):
    """Requested range ends on or before its start."""

    def __init__(self, start: date, end: date) -> None:
        self.start = start
        self.end = end
        super().__init__(f"Invalid range: end {end} must be after start {start}")


class DataFetchError(AvailabilityError):
    """Reading reservations for a room failed."""

    def __init__(self, property_key: str | None, room_number: str | None) -> None:
        self.property_key = property_key
        self.room_number = room_number
        super().__init__(
            f"Could not load reservations for room {room_number} ({property_key})"
        )


class StatusWriteError(AvailabilityError):
    """Persisting a reconciled room status failed."""

    def __init__(self, room_id: str, status: str) -> None:
        self.room_id = room_id
        self.status = status
        super().__init__(f"Could not set room {room_id} status to {status}")
