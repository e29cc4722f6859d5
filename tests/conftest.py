"""Shared pytest fixtures for roomkeeper tests."""
import sys
sys.dont_write_bytecode = True

import pytest  # noqa: E402

from .helpers import FakeReservationStore  # noqa: E402


@pytest.fixture
def store():
    """Empty in-memory reservation store."""
    return FakeReservationStore()


@pytest.fixture(autouse=True)
def _utc_hotel_timezone(monkeypatch):
    """Pin the hotel day to UTC unless a test overrides it."""
    monkeypatch.setenv("HOTEL_TIMEZONE", "UTC")
