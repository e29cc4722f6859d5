"""Exclusion constraint against double-booking a room.

The application checks for overlaps before writing, but the read and the
insert are not atomic. This constraint rejects the second of two concurrent
overlapping bookings for the same (property, room_number).

daterange(check_in, check_out, '[)') matches the application's half-open
semantics: check_out of one stay == check_in of the next is allowed.
Only blocking statuses (pending, confirmed, checked-in) participate.

Revision ID: 002_no_room_overlap_constraint
Revises: 001_rooms_and_bookings
Create Date: 2024-03-01
"""

from __future__ import annotations

from alembic import op

revision = "002_no_room_overlap_constraint"
down_revision = "001_rooms_and_bookings"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")
    op.execute(
        """
        ALTER TABLE bookings
        ADD CONSTRAINT no_room_overlap
        EXCLUDE USING gist (
            property WITH =,
            room_number WITH =,
            daterange(check_in, check_out, '[)') WITH &&
        )
        WHERE (status IN ('pending', 'confirmed', 'checked-in'))
        """
    )


def downgrade() -> None:
    op.execute("ALTER TABLE bookings DROP CONSTRAINT IF EXISTS no_room_overlap")
    # btree_gist is kept: other indexes may depend on it.
