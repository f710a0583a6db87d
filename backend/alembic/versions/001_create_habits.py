"""Create habits table.

Revision ID: 001_create_habits
Revises: None
Create Date: 2026-10-19

One row per habit. Schedule, quantity and both day maps are JSON columns
shaped exactly like habit_to_snapshot() output.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_create_habits"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "habits",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("kind", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("schedule", sa.JSON, nullable=False),
        sa.Column("cue", sa.String(500), nullable=True),
        sa.Column("note_name", sa.String(500), nullable=True),
        sa.Column("quantity", sa.JSON, nullable=True),
        sa.Column("completion_records", sa.JSON, nullable=False),
        sa.Column("progress_records", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_habits")),
    )
    op.create_index(op.f("ix_habits_status"), "habits", ["status"])


def downgrade() -> None:
    op.drop_index(op.f("ix_habits_status"), table_name="habits")
    op.drop_table("habits")
