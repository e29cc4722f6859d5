"""Availability endpoints for the booking form and the availability calendar.

GET  /availability/date      → is the night of a date taken
GET  /availability/range     → is a stay free, and what blocks it
GET  /availability/calendar  → per-day flags for one month (date picker)
GET  /availability/spans     → stays positioned on a grid window
POST /availability/check     → 409 if a stay would double-book the room

All queries take property_key and room_number; with either missing every
date is reported free.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict

from roomkeeper.api.deps import get_reservation_store
from roomkeeper.domain.availability import check_range
from roomkeeper.domain.calendar import CalendarView, booking_spans, room_bookings
from roomkeeper.domain.models import ReservationStore
from roomkeeper.domain.room_conflict import (
    AvailabilityContext,
    assert_no_room_conflict,
    build_index,
)

router = APIRouter(prefix="/availability", tags=["availability"])

MAX_SPAN_DAYS = 90


@dataclass
class _Scope:
    context: AvailabilityContext
    store: ReservationStore


def _scope(
    property_key: str | None = Query(None, description="Property the bookings reference"),
    room_number: str | None = Query(None, description="Room number"),
    exclude_reservation_id: str | None = Query(None, description="Booking being edited"),
    store: ReservationStore = Depends(get_reservation_store),
) -> _Scope:
    return _Scope(
        context=AvailabilityContext(property_key, room_number, exclude_reservation_id),
        store=store,
    )


class StayCheckRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    property_key: str
    room_number: str
    check_in: date
    check_out: date
    exclude_reservation_id: str | None = None


@router.get("/date")
def get_date_availability(
    day: date = Query(..., alias="date", description="Date (YYYY-MM-DD)"),
    scope: _Scope = Depends(_scope),
) -> dict:
    """Report whether the night of ``date`` is taken."""
    occupied = build_index(scope.store, scope.context).is_date_occupied(day)
    return {"date": day.isoformat(), "occupied": occupied}


@router.get("/range")
def get_range_availability(
    start_date: date = Query(..., description="Check-in date (inclusive)"),
    end_date: date = Query(..., description="Check-out date (exclusive)"),
    scope: _Scope = Depends(_scope),
) -> dict:
    """Report whether ``[start_date, end_date)`` is free and list blocking stays."""
    check_range(start_date, end_date)
    index = build_index(scope.store, scope.context)
    conflicts = index.conflicts(start_date, end_date)
    return {
        "start_date": start_date.isoformat(),
        "end_date": end_date.isoformat(),
        "available": not conflicts,
        "conflicts": [
            {
                "reservation_id": iv.reservation_id,
                "checkin": iv.check_in.isoformat(),
                "checkout": iv.check_out.isoformat(),
                "status": iv.status.value,
            }
            for iv in conflicts
        ],
    }


@router.get("/calendar")
def get_calendar(
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    scope: _Scope = Depends(_scope),
) -> dict:
    """Per-day picker flags for one month."""
    view = CalendarView.for_context(scope.store, scope.context)
    return {
        "year": year,
        "month": month,
        "selected": scope.context.is_selected,
        "days": [flags.to_dict() for flags in view.month(year, month)],
    }


@router.get("/spans")
def get_spans(
    start_date: date = Query(..., description="First day of the grid"),
    days: int = Query(14, ge=1, le=MAX_SPAN_DAYS),
    scope: _Scope = Depends(_scope),
) -> dict:
    """Stays of the room, any status, clipped to the grid window."""
    spans = booking_spans(room_bookings(scope.store, scope.context), start_date, days)
    return {
        "start_date": start_date.isoformat(),
        "days": days,
        "spans": [span.to_dict() for span in spans],
    }


@router.post("/check")
def check_stay(
    body: StayCheckRequest,
    store: ReservationStore = Depends(get_reservation_store),
) -> dict:
    """Validate a stay before a booking is created or its dates change.

    Responds 409 with the conflicting reservation when the room is taken.
    """
    context = AvailabilityContext(body.property_key, body.room_number, body.exclude_reservation_id)
    check_range(body.check_in, body.check_out)
    assert_no_room_conflict(store, context, check_in=body.check_in, check_out=body.check_out)
    return {"available": True}
