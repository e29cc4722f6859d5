"""Rooms and bookings tables.

Bookings point at rooms through (property, room_number), the way the
dashboard has always stored them.

Revision ID: 001_rooms_and_bookings
Revises:
Create Date: 2024-03-01
"""

from __future__ import annotations

from alembic import op

revision = "001_rooms_and_bookings"
down_revision = None
branch_labels = None
depends_on = None

_SQL = """
CREATE TABLE IF NOT EXISTS rooms (
    id          text PRIMARY KEY DEFAULT gen_random_uuid()::text,
    number      text NOT NULL,
    property    text NOT NULL,
    status      text NOT NULL DEFAULT 'available'
                CHECK (status IN ('available', 'occupied', 'maintenance', 'cleaning')),
    created_at  timestamptz NOT NULL DEFAULT now(),
    updated_at  timestamptz NOT NULL DEFAULT now(),
    UNIQUE (property, number)
);

CREATE TABLE IF NOT EXISTS bookings (
    id           text PRIMARY KEY DEFAULT gen_random_uuid()::text,
    property     text NOT NULL,
    room_number  text NOT NULL,
    check_in     date NOT NULL,
    check_out    date NOT NULL,
    status       text NOT NULL DEFAULT 'pending'
                 CHECK (status IN ('pending', 'confirmed', 'checked-in', 'checked-out', 'cancelled')),
    created_at   timestamptz NOT NULL DEFAULT now(),
    updated_at   timestamptz NOT NULL DEFAULT now(),
    CONSTRAINT bookings_stay_not_empty CHECK (check_out > check_in)
);

CREATE INDEX IF NOT EXISTS idx_bookings_room_stay
    ON bookings (property, room_number, check_in);
"""


def upgrade() -> None:
    op.execute(_SQL)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS bookings")
    op.execute("DROP TABLE IF EXISTS rooms")
