"""Tests for PgReservationStore.

The cursor is mocked so these run without Postgres.
"""

from datetime import date
from unittest.mock import MagicMock, patch

import psycopg2
import pytest

from roomkeeper.domain.errors import DataFetchError, StatusWriteError
from roomkeeper.domain.models import Reservation, Room
from roomkeeper.domain.statuses import RoomStatus
from roomkeeper.infra.repositories.reservations_repository import PgReservationStore


@pytest.fixture
def cur():
    """Mocked psycopg2 cursor."""
    return MagicMock()


@pytest.fixture
def mock_txn(cur):
    with patch("roomkeeper.infra.db.txn") as txn:
        txn.return_value.__enter__.return_value = cur
        yield txn


class TestFetchReservationsForRoom:
    def test_maps_rows(self, cur, mock_txn):
        cur.fetchall.return_value = [
            ("a1", date(2024, 3, 10), date(2024, 3, 15), "confirmed"),
            (42, date(2024, 3, 20), date(2024, 3, 22), "pending"),
        ]

        result = PgReservationStore().fetch_reservations_for_room("Sea View", "101")

        assert result == [
            Reservation("a1", date(2024, 3, 10), date(2024, 3, 15), "confirmed", "Sea View", "101"),
            Reservation("42", date(2024, 3, 20), date(2024, 3, 22), "pending", "Sea View", "101"),
        ]

    def test_query_filters_room_and_blocking_statuses(self, cur, mock_txn):
        cur.fetchall.return_value = []

        PgReservationStore().fetch_reservations_for_room("Sea View", "101")

        query, params = cur.execute.call_args[0]
        assert "FROM bookings" in query
        assert "property = %s" in query
        assert "room_number = %s" in query
        assert params[0] == "Sea View"
        assert params[1] == "101"
        assert params[2] == ["pending", "confirmed", "checked-in"]

    def test_uses_given_connection(self, cur, mock_txn):
        cur.fetchall.return_value = []
        conn = MagicMock()

        PgReservationStore(conn).fetch_reservations_for_room("Sea View", "101")

        mock_txn.assert_called_once_with(conn)

    def test_db_error_becomes_data_fetch_error(self, cur, mock_txn):
        cur.execute.side_effect = psycopg2.OperationalError("connection lost")

        with pytest.raises(DataFetchError) as exc_info:
            PgReservationStore().fetch_reservations_for_room("Sea View", "101")

        assert exc_info.value.property_key == "Sea View"
        assert isinstance(exc_info.value.__cause__, psycopg2.OperationalError)

    def test_missing_database_url_becomes_data_fetch_error(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        with pytest.raises(DataFetchError) as exc_info:
            PgReservationStore().fetch_reservations_for_room("Sea View", "101")

        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestFetchBookingsForRoom:
    def test_keeps_every_status(self, cur, mock_txn):
        cur.fetchall.return_value = [
            ("a1", date(2024, 3, 10), date(2024, 3, 12), "checked-out"),
            ("a2", date(2024, 3, 12), date(2024, 3, 14), "cancelled"),
        ]

        result = PgReservationStore().fetch_bookings_for_room("Sea View", "101")

        assert [r.status for r in result] == ["checked-out", "cancelled"]
        query, params = cur.execute.call_args[0]
        assert "status = ANY" not in query
        assert params == ("Sea View", "101")

    def test_db_error_becomes_data_fetch_error(self, cur, mock_txn):
        cur.execute.side_effect = psycopg2.OperationalError("connection lost")

        with pytest.raises(DataFetchError):
            PgReservationStore().fetch_bookings_for_room("Sea View", "101")


class TestUpdateRoomStatus:
    def test_updates_status_and_timestamp(self, cur, mock_txn):
        cur.rowcount = 1

        PgReservationStore().update_room_status("room-101", RoomStatus.OCCUPIED)

        query, params = cur.execute.call_args[0]
        assert "UPDATE rooms" in query
        assert "updated_at = now()" in query
        assert params == ("occupied", "room-101")

    def test_accepts_string_status(self, cur, mock_txn):
        cur.rowcount = 1
        PgReservationStore().update_room_status("room-101", "available")
        assert cur.execute.call_args[0][1] == ("available", "room-101")

    def test_db_error_becomes_status_write_error(self, cur, mock_txn):
        cur.execute.side_effect = psycopg2.OperationalError("read-only transaction")

        with pytest.raises(StatusWriteError) as exc_info:
            PgReservationStore().update_room_status("room-101", RoomStatus.OCCUPIED)

        assert exc_info.value.room_id == "room-101"
        assert exc_info.value.status == "occupied"

    def test_missing_database_url_becomes_status_write_error(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        with pytest.raises(StatusWriteError):
            PgReservationStore().update_room_status("room-101", RoomStatus.OCCUPIED)

    def test_missing_room_is_a_write_error(self, cur, mock_txn):
        cur.rowcount = 0

        with pytest.raises(StatusWriteError):
            PgReservationStore().update_room_status("room-404", RoomStatus.AVAILABLE)


class TestListRooms:
    def test_maps_rows(self, cur, mock_txn):
        cur.fetchall.return_value = [
            ("room-101", "101", "Sea View", "available"),
            ("room-102", 102, "Sea View", "maintenance"),
        ]

        rooms = PgReservationStore().list_rooms()

        assert rooms == [
            Room("room-101", "101", "Sea View", "available"),
            Room("room-102", "102", "Sea View", "maintenance"),
        ]

    def test_db_error_becomes_data_fetch_error(self, cur, mock_txn):
        cur.execute.side_effect = psycopg2.OperationalError("boom")

        with pytest.raises(DataFetchError):
            PgReservationStore().list_rooms()

    def test_missing_database_url_becomes_data_fetch_error(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        with pytest.raises(DataFetchError):
            PgReservationStore().list_rooms()
