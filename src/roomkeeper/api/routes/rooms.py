"""Room status reconciliation endpoints.

POST /rooms/{room_id}/reconcile  → recompute one room's occupancy status
POST /rooms/reconcile            → sweep all rooms
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel, ConfigDict

from roomkeeper.api.deps import get_reservation_store
from roomkeeper.domain.models import ReservationStore, RoomKey
from roomkeeper.domain.room_status import reconcile_all_rooms, reconcile_room_status
from roomkeeper.domain.statuses import RoomStatus

router = APIRouter(prefix="/rooms", tags=["rooms"])


class ReconcileRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    property_key: str
    room_number: str
    current_status: RoomStatus | None = None


@router.post("/reconcile")
def reconcile_rooms(store: ReservationStore = Depends(get_reservation_store)) -> dict:
    """Reconcile every room; failures are counted, not raised."""
    summary = reconcile_all_rooms(store)
    return {
        "checked": summary.checked,
        "updated": summary.updated,
        "failed": summary.failed,
    }


@router.post("/{room_id}/reconcile")
def reconcile_room(
    body: ReconcileRequest,
    room_id: str = Path(..., description="Room ID"),
    store: ReservationStore = Depends(get_reservation_store),
) -> dict:
    """Recompute a room's status after a booking change.

    maintenance and cleaning are returned unchanged. A failed write answers
    502 and can be retried.
    """
    status = reconcile_room_status(
        store,
        room_id,
        RoomKey(body.property_key, body.room_number),
        body.current_status,
    )
    return {"room_id": room_id, "status": status.value}
