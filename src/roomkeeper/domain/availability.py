"""Availability index for a single room.

Built from the reservations of one room, queried, then discarded. Intervals
are kept sorted by check-in together with a running maximum of check-out,
so point and range queries are a single bisect:

    occupied(d)        <=> max(check_out of stays with check_in <= d) > d
    free([start, end)) <=> max(check_out of stays with check_in < end) <= start

This stays correct even if stored data already contains overlapping stays.
"""

from __future__ import annotations

import logging
from bisect import bisect_left, bisect_right
from datetime import date, datetime
from typing import Iterable

from roomkeeper.domain.errors import InvalidIntervalError, InvalidRangeError
from roomkeeper.domain.intervals import Interval, parse_date, to_interval
from roomkeeper.domain.models import Reservation
from roomkeeper.domain.statuses import is_blocking

logger = logging.getLogger(__name__)

DateLike = date | datetime | str


class AvailabilityIndex:
    """Sorted blocking intervals of one room."""

    def __init__(self, intervals: Iterable[Interval] = (), skipped: Iterable[str] = ()) -> None:
        self._intervals: list[Interval] = sorted(
            intervals, key=lambda iv: (iv.check_in, iv.check_out)
        )
        self._starts: list[date] = [iv.check_in for iv in self._intervals]
        self._max_end: list[date] = []
        running: date | None = None
        for iv in self._intervals:
            running = iv.check_out if running is None else max(running, iv.check_out)
            self._max_end.append(running)
        self.skipped: tuple[str, ...] = tuple(skipped)

    @classmethod
    def empty(cls) -> AvailabilityIndex:
        return cls()

    @classmethod
    def build(
        cls,
        reservations: Iterable[Reservation],
        exclude_id: str | None = None,
    ) -> AvailabilityIndex:
        """Build an index from the reservations of one room.

        Args:
            reservations: Reservations of the room, any status.
            exclude_id: Reservation to leave out (the booking being edited).

        Records with malformed dates or an unknown status are logged and
        skipped; non-blocking reservations are dropped.
        """
        intervals: list[Interval] = []
        skipped: list[str] = []

        for reservation in reservations:
            if exclude_id is not None and str(reservation.id) == str(exclude_id):
                continue
            try:
                if not is_blocking(reservation.status):
                    continue
                intervals.append(to_interval(reservation))
            except ValueError:
                skipped.append(str(reservation.id))
                logger.warning(
                    "reservation skipped: unknown status",
                    extra={"extra_fields": {"reservation_id": str(reservation.id)}},
                )
            except InvalidIntervalError as exc:
                skipped.append(str(reservation.id))
                logger.warning(
                    "reservation skipped: invalid stay",
                    extra={
                        "extra_fields": {
                            "reservation_id": str(reservation.id),
                            "reason": exc.reason,
                        }
                    },
                )

        return cls(intervals, skipped)

    def __len__(self) -> int:
        return len(self._intervals)

    @property
    def intervals(self) -> tuple[Interval, ...]:
        return tuple(self._intervals)

    def is_date_occupied(self, day: DateLike) -> bool:
        """True if some retained stay covers the night of ``day``."""
        day = parse_date(day)
        i = bisect_right(self._starts, day)
        return i > 0 and self._max_end[i - 1] > day

    def is_range_available(self, start: DateLike, end: DateLike) -> bool:
        """True if no retained stay overlaps ``[start, end)``.

        Raises:
            InvalidRangeError: If ``end <= start``.
        """
        start, end = check_range(start, end)
        i = bisect_left(self._starts, end)
        return not (i > 0 and self._max_end[i - 1] > start)

    def conflicts(self, start: DateLike, end: DateLike) -> list[Interval]:
        """Retained stays overlapping ``[start, end)``, ordered by check-in."""
        start, end = check_range(start, end)
        i = bisect_left(self._starts, end)
        return [iv for iv in self._intervals[:i] if iv.check_out > start]

    def free_windows(self, start: DateLike, end: DateLike) -> list[tuple[date, date]]:
        """Maximal free half-open sub-ranges of ``[start, end)``."""
        start, end = check_range(start, end)
        windows: list[tuple[date, date]] = []
        cursor = start
        for iv in self.conflicts(start, end):
            if iv.check_in > cursor:
                windows.append((cursor, iv.check_in))
            cursor = max(cursor, iv.check_out)
        if cursor < end:
            windows.append((cursor, end))
        return windows


def check_range(start: DateLike, end: DateLike) -> tuple[date, date]:
    """Parse a half-open range, raising InvalidRangeError if it is empty."""
    start, end = parse_date(start), parse_date(end)
    if end <= start:
        raise InvalidRangeError(start, end)
    return start, end


def build(
    reservations: Iterable[Reservation],
    exclude_id: str | None = None,
) -> AvailabilityIndex:
    return AvailabilityIndex.build(reservations, exclude_id=exclude_id)
