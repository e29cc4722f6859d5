"""Request-scoped dependencies."""

from __future__ import annotations

from roomkeeper.domain.models import ReservationStore


def get_reservation_store() -> ReservationStore:
    """Postgres-backed store; overridden in tests via app.dependency_overrides."""
    from roomkeeper.infra.repositories.reservations_repository import PgReservationStore

    return PgReservationStore()
