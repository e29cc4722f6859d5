"""Room conflict policy.

Decides whether a room (property + room number) can take a stay, on top of
``AvailabilityIndex``.

Overlap formula:  (new_checkin < existing_checkout) AND (new_checkout > existing_checkin)
Strict inequality allows check-out day == check-in day (touching dates are OK).

Only blocking statuses generate conflicts: pending, confirmed, checked-in.
When no property or room is selected every date is available, so a form is
not blocked before its selection is complete.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from roomkeeper.domain.availability import AvailabilityIndex, DateLike, check_range
from roomkeeper.domain.intervals import parse_date
from roomkeeper.domain.models import ReservationStore, RoomKey

logger = logging.getLogger(__name__)


class RoomConflictError(Exception):
    """Raised when a room has an overlapping reservation."""

    def __init__(
        self,
        room_key: RoomKey,
        conflicting_reservation_id: str,
        existing_checkin: date,
        existing_checkout: date,
    ) -> None:
        self.room_key = room_key
        self.conflicting_reservation_id = conflicting_reservation_id
        self.existing_checkin = existing_checkin
        self.existing_checkout = existing_checkout
        super().__init__(
            f"Room {room_key} has a conflicting reservation "
            f"({existing_checkin} to {existing_checkout})"
        )


@dataclass(frozen=True)
class AvailabilityContext:
    """Scope of an availability query."""

    property_key: str | None = None
    room_number: str | None = None
    exclude_reservation_id: str | None = None

    @property
    def is_selected(self) -> bool:
        return bool(
            self.property_key
            and self.property_key.strip()
            and self.room_number
            and self.room_number.strip()
        )

    @property
    def room_key(self) -> RoomKey | None:
        if not self.is_selected:
            return None
        return RoomKey(self.property_key.strip(), self.room_number.strip())


def build_index(store: ReservationStore, context: AvailabilityContext) -> AvailabilityIndex:
    """Fetch the room's reservations and index them.

    Returns an empty index, without touching the store, when no room is
    selected. DataFetchError from the store propagates.
    """
    room_key = context.room_key
    if room_key is None:
        return AvailabilityIndex.empty()

    reservations = store.fetch_reservations_for_room(
        room_key.property_key, room_key.room_number
    )
    return AvailabilityIndex.build(
        reservations, exclude_id=context.exclude_reservation_id
    )


def is_date_occupied(store: ReservationStore, day: DateLike, context: AvailabilityContext) -> bool:
    return build_index(store, context).is_date_occupied(day)


def is_range_available(
    store: ReservationStore,
    start: DateLike,
    end: DateLike,
    context: AvailabilityContext,
) -> bool:
    """True if ``[start, end)`` is free for the context's room.

    Raises:
        InvalidRangeError: If ``end <= start``, whether or not a room is selected.
    """
    start, end = check_range(start, end)
    return build_index(store, context).is_range_available(start, end)


def check_room_conflict(
    store: ReservationStore,
    context: AvailabilityContext,
    *,
    check_in: DateLike,
    check_out: DateLike,
) -> str | None:
    """Check if the room has a blocking reservation overlapping the stay.

    Args:
        store: Reservation store.
        context: Room and optional reservation to exclude (for date edits).
        check_in: Desired check-in date (inclusive).
        check_out: Desired check-out date (exclusive / departure day).

    Returns:
        The ID of the first conflicting reservation, or None if no conflict.
    """
    conflict = _first_conflict(store, context, parse_date(check_in), parse_date(check_out))
    return conflict.reservation_id if conflict is not None else None


def assert_no_room_conflict(
    store: ReservationStore,
    context: AvailabilityContext,
    *,
    check_in: DateLike,
    check_out: DateLike,
) -> None:
    """Raise RoomConflictError if the room has an overlapping reservation.

    Meant to run right before a booking is inserted or its dates changed.
    """
    conflict = _first_conflict(store, context, parse_date(check_in), parse_date(check_out))
    if conflict is not None:
        raise RoomConflictError(
            room_key=context.room_key,
            conflicting_reservation_id=conflict.reservation_id,
            existing_checkin=conflict.check_in,
            existing_checkout=conflict.check_out,
        )


def _first_conflict(store, context, check_in: date, check_out: date):
    conflicts = build_index(store, context).conflicts(check_in, check_out)
    if not conflicts:
        return None

    first = conflicts[0]
    room_key = context.room_key
    logger.warning(
        "room conflict detected",
        extra={
            "extra_fields": {
                "property_key": room_key.property_key,
                "room_number": room_key.room_number,
                "requested_checkin": check_in.isoformat(),
                "requested_checkout": check_out.isoformat(),
                "conflicting_reservation_id": first.reservation_id,
                "existing_checkin": first.check_in.isoformat(),
                "existing_checkout": first.check_out.isoformat(),
            },
        },
    )
    return first
