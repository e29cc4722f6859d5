"""Tests for the half-open interval model."""

from datetime import date, datetime, timezone

import pytest

from roomkeeper.domain.errors import InvalidIntervalError
from roomkeeper.domain.intervals import Interval, contains_date, parse_date, to_interval
from roomkeeper.domain.statuses import ReservationStatus

from .helpers import make_reservation


class TestParseDate:
    def test_date_passthrough(self):
        assert parse_date(date(2024, 3, 10)) == date(2024, 3, 10)

    def test_datetime_drops_time(self):
        assert parse_date(datetime(2024, 3, 10, 23, 59, tzinfo=timezone.utc)) == date(2024, 3, 10)

    def test_iso_date_string(self):
        assert parse_date("2024-03-10") == date(2024, 3, 10)

    def test_iso_timestamp_string(self):
        assert parse_date("2024-03-10T14:00:00+00:00") == date(2024, 3, 10)

    def test_iso_timestamp_with_z(self):
        assert parse_date("2024-03-10T00:00:00Z") == date(2024, 3, 10)

    def test_space_separated_timestamp(self):
        assert parse_date("2024-03-10 08:30:00") == date(2024, 3, 10)

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            parse_date("next tuesday")

    def test_unsupported_type_raises(self):
        with pytest.raises(ValueError):
            parse_date(20240310)


class TestToInterval:
    def test_converts_reservation(self):
        interval = to_interval(make_reservation("r1", "2024-03-10", "2024-03-15"))

        assert interval == Interval(
            reservation_id="r1",
            check_in=date(2024, 3, 10),
            check_out=date(2024, 3, 15),
            status=ReservationStatus.CONFIRMED,
        )
        assert interval.nights == 5
        assert interval.is_blocking is True

    def test_cancelled_is_not_blocking(self):
        interval = to_interval(make_reservation("r1", "2024-03-10", "2024-03-15", status="cancelled"))
        assert interval.is_blocking is False

    def test_zero_night_stay_rejected(self):
        with pytest.raises(InvalidIntervalError) as exc_info:
            to_interval(make_reservation("r1", "2024-03-10", "2024-03-10"))
        assert exc_info.value.reservation_id == "r1"

    def test_reversed_stay_rejected(self):
        with pytest.raises(InvalidIntervalError):
            to_interval(make_reservation("r1", "2024-03-15", "2024-03-10"))

    def test_unparseable_date_rejected(self):
        with pytest.raises(InvalidIntervalError) as exc_info:
            to_interval(make_reservation("r1", "not-a-date", "2024-03-10"))
        assert "unparseable" in exc_info.value.reason

    def test_unknown_status_rejected(self):
        with pytest.raises(InvalidIntervalError):
            to_interval(make_reservation("r1", "2024-03-10", "2024-03-12", status="no-show"))


class TestContainsDate:
    @pytest.fixture
    def stay(self):
        return to_interval(make_reservation("r1", "2024-03-10", "2024-03-15"))

    def test_check_in_day_is_occupied(self, stay):
        assert contains_date(stay, date(2024, 3, 10)) is True

    def test_last_night_is_occupied(self, stay):
        assert stay.contains_date(date(2024, 3, 14)) is True

    def test_check_out_day_is_free(self, stay):
        assert stay.contains_date(date(2024, 3, 15)) is False

    def test_day_before_is_free(self, stay):
        assert stay.contains_date(date(2024, 3, 9)) is False


class TestOverlaps:
    @pytest.fixture
    def stay(self):
        return to_interval(make_reservation("r1", "2024-03-10", "2024-03-15"))

    def test_touching_after_is_not_overlap(self, stay):
        assert stay.overlaps(date(2024, 3, 15), date(2024, 3, 18)) is False

    def test_touching_before_is_not_overlap(self, stay):
        assert stay.overlaps(date(2024, 3, 5), date(2024, 3, 10)) is False

    def test_partial_overlap(self, stay):
        assert stay.overlaps(date(2024, 3, 14), date(2024, 3, 18)) is True

    def test_containing_range_overlaps(self, stay):
        assert stay.overlaps(date(2024, 3, 1), date(2024, 3, 30)) is True
