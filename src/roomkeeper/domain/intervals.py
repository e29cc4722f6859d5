"""Half-open stay intervals.

A reservation occupies ``[check_in, check_out)``: the check-out day is free
for the next guest's check-in (same-day turnover).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from roomkeeper.domain.errors import InvalidIntervalError
from roomkeeper.domain.models import Reservation
from roomkeeper.domain.statuses import ReservationStatus, is_blocking


def parse_date(value: date | datetime | str) -> date:
    """Normalise a date-like value to a calendar date.

    Accepts ``date``, ``datetime`` (time-of-day dropped) and ISO strings,
    either plain dates (``2024-03-10``) or timestamps
    (``2024-03-10T14:00:00+00:00``, ``2024-03-10 14:00:00``).

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported date value of type {type(value).__name__}")

    text = value.strip()
    if len(text) > 10 and text[10] in ("T", " "):
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    return date.fromisoformat(text)


@dataclass(frozen=True)
class Interval:
    """A blocking or non-blocking stay for one reservation."""

    reservation_id: str
    check_in: date
    check_out: date
    status: ReservationStatus

    @property
    def is_blocking(self) -> bool:
        return is_blocking(self.status)

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    def contains_date(self, day: date) -> bool:
        """True if ``day`` is a night of this stay (check-out day excluded)."""
        return self.check_in <= day < self.check_out

    def overlaps(self, start: date, end: date) -> bool:
        """True if this stay overlaps ``[start, end)``. Touching is not overlap."""
        return start < self.check_out and end > self.check_in


def to_interval(reservation: Reservation) -> Interval:
    """Convert a reservation to an interval.

    Raises:
        InvalidIntervalError: If a date or the status cannot be parsed, or
            check-out is not after check-in.
    """
    try:
        check_in = parse_date(reservation.check_in)
        check_out = parse_date(reservation.check_out)
    except (TypeError, ValueError) as exc:
        raise InvalidIntervalError(reservation.id, f"unparseable date ({exc})") from exc

    if check_out <= check_in:
        raise InvalidIntervalError(
            reservation.id,
            f"check-out {check_out} is not after check-in {check_in}",
        )

    try:
        status = ReservationStatus(reservation.status)
    except ValueError as exc:
        raise InvalidIntervalError(
            reservation.id, f"unknown status {reservation.status!r}"
        ) from exc

    return Interval(
        reservation_id=str(reservation.id),
        check_in=check_in,
        check_out=check_out,
        status=status,
    )


def contains_date(interval: Interval, day: date) -> bool:
    return interval.contains_date(day)
