"""Reservations repository - bookings and room status in Postgres.

Uses raw SQL with psycopg2 (no ORM). Bookings reference rooms by the
(property, room_number) pair, not by room id.

A missing DATABASE_URL is reported like any other connection failure, as
DataFetchError or StatusWriteError.
"""

from __future__ import annotations

import logging

import psycopg2
from psycopg2.extensions import connection as PgConnection

from roomkeeper.domain.errors import DataFetchError, StatusWriteError
from roomkeeper.domain.models import Reservation, Room
from roomkeeper.domain.statuses import BLOCKING_STATUSES, RoomStatus

logger = logging.getLogger(__name__)

_DB_ERRORS = (psycopg2.Error, RuntimeError)


class PgReservationStore:
    """ReservationStore backed by the bookings and rooms tables.

    Each call runs in its own short transaction. Pass ``conn`` to reuse an
    existing connection (it is committed but not closed).
    """

    def __init__(self, conn: PgConnection | None = None) -> None:
        self._conn = conn

    def fetch_reservations_for_room(
        self, property_key: str, room_number: str
    ) -> list[Reservation]:
        """Blocking reservations of one room, ordered by check-in."""
        return self._fetch_room_bookings(
            property_key,
            room_number,
            """
            SELECT id, check_in, check_out, status
            FROM bookings
            WHERE property = %s
              AND room_number = %s
              AND status = ANY(%s)
            ORDER BY check_in
            """,
            (property_key, room_number, [s.value for s in BLOCKING_STATUSES]),
        )

    def fetch_bookings_for_room(
        self, property_key: str, room_number: str
    ) -> list[Reservation]:
        """All reservations of one room, any status, ordered by check-in."""
        return self._fetch_room_bookings(
            property_key,
            room_number,
            """
            SELECT id, check_in, check_out, status
            FROM bookings
            WHERE property = %s
              AND room_number = %s
            ORDER BY check_in
            """,
            (property_key, room_number),
        )

    def _fetch_room_bookings(
        self, property_key: str, room_number: str, query: str, params: tuple
    ) -> list[Reservation]:
        from roomkeeper.infra.db import fetchall, txn

        try:
            with txn(self._conn) as cur:
                rows = fetchall(cur, query, params)
        except _DB_ERRORS as exc:
            logger.error(
                "reservation fetch failed",
                extra={
                    "extra_fields": {
                        "property_key": property_key,
                        "room_number": room_number,
                        "pgcode": getattr(exc, "pgcode", None),
                    }
                },
            )
            raise DataFetchError(property_key, room_number) from exc

        return [
            Reservation(
                id=str(row[0]),
                check_in=row[1],
                check_out=row[2],
                status=row[3],
                property_key=property_key,
                room_number=room_number,
            )
            for row in rows
        ]

    def update_room_status(self, room_id: str, status: RoomStatus) -> None:
        from roomkeeper.infra.db import txn

        value = RoomStatus(status).value
        try:
            with txn(self._conn) as cur:
                cur.execute(
                    """
                    UPDATE rooms
                    SET status = %s, updated_at = now()
                    WHERE id = %s
                    """,
                    (value, room_id),
                )
                updated = cur.rowcount
        except _DB_ERRORS as exc:
            logger.error(
                "room status write failed",
                extra={
                    "extra_fields": {
                        "room_id": room_id,
                        "status": value,
                        "pgcode": getattr(exc, "pgcode", None),
                    }
                },
            )
            raise StatusWriteError(room_id, value) from exc

        if updated == 0:
            logger.error(
                "room status write matched no room",
                extra={"extra_fields": {"room_id": room_id, "status": value}},
            )
            raise StatusWriteError(room_id, value)

    def list_rooms(self) -> list[Room]:
        from roomkeeper.infra.db import fetchall, txn

        try:
            with txn(self._conn) as cur:
                rows = fetchall(
                    cur,
                    """
                    SELECT id, number, property, status
                    FROM rooms
                    ORDER BY property, number
                    """,
                )
        except _DB_ERRORS as exc:
            logger.error(
                "room list fetch failed",
                extra={"extra_fields": {"pgcode": getattr(exc, "pgcode", None)}},
            )
            raise DataFetchError(None, None) from exc

        return [
            Room(id=str(row[0]), number=str(row[1]), property_key=str(row[2]), status=row[3])
            for row in rows
        ]
