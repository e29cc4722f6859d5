"""Calendar presentation helpers for the booking date picker and the
availability grid.

Nothing here is stored: flags are computed on demand from an
``AvailabilityIndex`` and recomputed whenever the month, room or property
changes.
"""

from __future__ import annotations

import calendar as _calendar
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Iterator

from roomkeeper.domain.availability import AvailabilityIndex, DateLike
from roomkeeper.domain.errors import InvalidIntervalError
from roomkeeper.domain.intervals import parse_date, to_interval
from roomkeeper.domain.models import Reservation, ReservationStore
from roomkeeper.domain.room_conflict import AvailabilityContext, build_index, is_date_occupied
from roomkeeper.infra.time import hotel_today

logger = logging.getLogger(__name__)


def is_day_disabled_for_picker(
    store: ReservationStore,
    day: DateLike,
    context: AvailabilityContext,
) -> bool:
    """True if the picker must not let the user select ``day``.

    The booking being edited (``context.exclude_reservation_id``) never
    disables its own dates, and nothing is disabled before a room is selected.
    """
    return is_date_occupied(store, day, context)


@dataclass(frozen=True)
class DayFlags:
    date: date
    booked: bool
    is_today: bool
    is_weekend: bool

    @property
    def available(self) -> bool:
        return not self.booked

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "booked": self.booked,
            "available": self.available,
            "is_today": self.is_today,
            "is_weekend": self.is_weekend,
        }


class SelectionOutcome(str, Enum):
    PARTIAL = "partial"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class RangeSelection:
    outcome: SelectionOutcome
    start: date
    end: date | None = None
    reason: str | None = None


class CalendarView:
    """Per-day decoration of one room's calendar."""

    def __init__(self, index: AvailabilityIndex, *, selected: bool = True, today: date | None = None) -> None:
        self.index = index
        self.selected = selected
        self.today = today if today is not None else hotel_today()

    @classmethod
    def for_context(
        cls,
        store: ReservationStore,
        context: AvailabilityContext,
        today: date | None = None,
    ) -> CalendarView:
        return cls(build_index(store, context), selected=context.is_selected, today=today)

    def day_flags(self, day: DateLike) -> DayFlags:
        day = parse_date(day)
        return DayFlags(
            date=day,
            booked=self.selected and self.index.is_date_occupied(day),
            is_today=day == self.today,
            is_weekend=day.weekday() >= 5,
        )

    def days(self, start: date, count: int) -> Iterator[DayFlags]:
        for offset in range(count):
            yield self.day_flags(start + timedelta(days=offset))

    def month(self, year: int, month: int) -> Iterator[DayFlags]:
        _, length = _calendar.monthrange(year, month)
        return self.days(date(year, month, 1), length)

    def select_range(self, start: DateLike, end: DateLike | None = None) -> RangeSelection:
        """Apply a picker click.

        A first click (no end yet) is a partial selection. A complete range is
        accepted if free, otherwise rejected with reason "overlap". A range
        whose end is not after its start is rejected with reason "invalid".
        """
        start = parse_date(start)
        if end is None:
            return RangeSelection(SelectionOutcome.PARTIAL, start)

        end = parse_date(end)
        if end <= start:
            return RangeSelection(SelectionOutcome.REJECTED, start, end, reason="invalid")
        if self.selected and not self.index.is_range_available(start, end):
            return RangeSelection(SelectionOutcome.REJECTED, start, end, reason="overlap")
        return RangeSelection(SelectionOutcome.ACCEPTED, start, end)


@dataclass(frozen=True)
class BookingSpan:
    """A reservation clipped to a grid window."""

    reservation_id: str
    status: str
    offset_days: int
    length_days: int
    total_days: int

    @property
    def left_pct(self) -> float:
        return self.offset_days / self.total_days * 100

    @property
    def width_pct(self) -> float:
        return self.length_days / self.total_days * 100

    def to_dict(self) -> dict:
        return {
            "reservation_id": self.reservation_id,
            "status": self.status,
            "offset_days": self.offset_days,
            "length_days": self.length_days,
            "left_pct": round(self.left_pct, 4),
            "width_pct": round(self.width_pct, 4),
        }


def room_bookings(store: ReservationStore, context: AvailabilityContext) -> list[Reservation]:
    """Every reservation of the context's room, any status, for the grid.

    Empty without a store call when no room is selected; the edited booking
    is left out.
    """
    room_key = context.room_key
    if room_key is None:
        return []
    bookings = store.fetch_bookings_for_room(room_key.property_key, room_key.room_number)
    exclude_id = context.exclude_reservation_id
    if exclude_id is None:
        return bookings
    return [r for r in bookings if str(r.id) != str(exclude_id)]


def booking_spans(
    reservations: Iterable[Reservation],
    view_start: date,
    days: int,
) -> list[BookingSpan]:
    """Position stays of any status on a ``days``-wide grid starting at ``view_start``.

    Stays outside the window are left out. Reservations with malformed dates
    or an unknown status are logged and skipped.
    """
    if days <= 0:
        raise ValueError("days must be positive")

    view_end = view_start + timedelta(days=days)
    spans: list[BookingSpan] = []
    for reservation in reservations:
        try:
            interval = to_interval(reservation)
        except InvalidIntervalError as exc:
            logger.warning(
                "reservation skipped: invalid stay",
                extra={
                    "extra_fields": {
                        "reservation_id": str(reservation.id),
                        "reason": exc.reason,
                    }
                },
            )
            continue
        if not interval.overlaps(view_start, view_end):
            continue
        first = max(interval.check_in, view_start)
        last = min(interval.check_out, view_end)
        spans.append(
            BookingSpan(
                reservation_id=interval.reservation_id,
                status=interval.status.value,
                offset_days=(first - view_start).days,
                length_days=(last - first).days,
                total_days=days,
            )
        )
    spans.sort(key=lambda span: span.offset_days)
    return spans
