"""Room status reconciliation.

A room is "occupied" while a blocking reservation covers tonight and
"available" otherwise. "maintenance" and "cleaning" belong to housekeeping
and are never overwritten here.

Reconciliation is idempotent: it only writes when the derived status differs
from the current one, so it is safe to re-run after a failed write.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from roomkeeper.domain.errors import DataFetchError, StatusWriteError
from roomkeeper.domain.models import ReservationStore, RoomKey
from roomkeeper.domain.room_conflict import AvailabilityContext, build_index
from roomkeeper.domain.statuses import RoomStatus, is_manual
from roomkeeper.infra.time import hotel_today

logger = logging.getLogger(__name__)


def _coerce_status(current_status: RoomStatus | str | None) -> RoomStatus | None:
    if current_status is None or current_status == "":
        return None
    return RoomStatus(current_status)


def reconcile_room_status(
    store: ReservationStore,
    room_id: str,
    room_key: RoomKey,
    current_status: RoomStatus | str | None,
    today: date | None = None,
) -> RoomStatus:
    """Derive and persist the occupancy status of a room.

    Args:
        store: Reservation store (reads bookings, writes the room status).
        room_id: Room to update.
        room_key: Property + room number the bookings are keyed by.
        current_status: Status the caller last saw. None or "" means unknown;
            the derived status is then always written.
        today: Day to evaluate; defaults to the hotel's current day.

    Returns:
        The room's status after reconciliation.

    Raises:
        ValueError: If current_status is not a known room status.
        DataFetchError: If the bookings could not be read.
        StatusWriteError: If the status could not be persisted.
    """
    current = _coerce_status(current_status)
    if current is not None and is_manual(current):
        return current

    if today is None:
        today = hotel_today()

    index = build_index(
        store,
        AvailabilityContext(room_key.property_key, room_key.room_number),
    )
    target = RoomStatus.OCCUPIED if index.is_date_occupied(today) else RoomStatus.AVAILABLE

    if target != current:
        store.update_room_status(room_id, target)
        logger.info(
            "room status reconciled",
            extra={
                "extra_fields": {
                    "room_id": room_id,
                    "from_status": current.value if current is not None else None,
                    "to_status": target.value,
                    "day": today.isoformat(),
                }
            },
        )

    return target


def reconcile_after_booking_mutation(
    store: ReservationStore,
    room_id: str,
    room_key: RoomKey,
    current_status: RoomStatus | str | None,
    today: date | None = None,
) -> RoomStatus | None:
    """Reconcile after a booking create/update/delete without failing it.

    Entry point for the booking service that owns reservation writes; call it
    right after the booking row is committed.

    Store errors are logged and swallowed: the booking write has already
    happened and is not rolled back. Returns None when reconciliation failed.
    """
    try:
        return reconcile_room_status(store, room_id, room_key, current_status, today)
    except (DataFetchError, StatusWriteError) as exc:
        logger.error(
            "room status reconciliation failed",
            extra={
                "extra_fields": {
                    "room_id": room_id,
                    "error": type(exc).__name__,
                }
            },
        )
        return None


@dataclass
class ReconcileSummary:
    checked: int = 0
    updated: int = 0
    failed: list[str] = field(default_factory=list)


def reconcile_all_rooms(store: ReservationStore, today: date | None = None) -> ReconcileSummary:
    """Reconcile every room; used by the periodic sweep.

    Raises:
        DataFetchError: If the room list itself could not be read.
    """
    if today is None:
        today = hotel_today()

    summary = ReconcileSummary()
    for room in store.list_rooms():
        summary.checked += 1
        try:
            new_status = reconcile_room_status(store, room.id, room.key, room.status, today)
        except (DataFetchError, StatusWriteError, ValueError) as exc:
            summary.failed.append(room.id)
            logger.error(
                "room status reconciliation failed",
                extra={"extra_fields": {"room_id": room.id, "error": type(exc).__name__}},
            )
            continue
        if new_status != _coerce_status(room.status):
            summary.updated += 1

    logger.info(
        "room status sweep finished",
        extra={
            "extra_fields": {
                "day": today.isoformat(),
                "checked": summary.checked,
                "updated": summary.updated,
                "failed": len(summary.failed),
            }
        },
    )
    return summary
