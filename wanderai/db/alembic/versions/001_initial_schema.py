"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-18

Creates:
- saved_itinerary (full snapshot as a JSON document)
- day_note (synced per-day notes)
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

JSONDocument = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    """Create all tables."""
    # saved_itinerary table
    op.create_table(
        "saved_itinerary",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("itinerary_id", sa.Text(), nullable=False),
        sa.Column("destination", sa.Text(), nullable=False),
        sa.Column("data", JSONDocument, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("user_id", "itinerary_id"),
    )
    op.create_index("idx_saved_itinerary_user", "saved_itinerary", ["user_id", "created_at"])

    # day_note table
    op.create_table(
        "day_note",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("itinerary_id", sa.Text(), nullable=False),
        sa.Column("day", sa.Integer(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("user_id", "itinerary_id", "day"),
        sa.ForeignKeyConstraint(
            ["user_id", "itinerary_id"],
            ["saved_itinerary.user_id", "saved_itinerary.itinerary_id"],
            ondelete="CASCADE",
        ),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("day_note")
    op.drop_index("idx_saved_itinerary_user", table_name="saved_itinerary")
    op.drop_table("saved_itinerary")
