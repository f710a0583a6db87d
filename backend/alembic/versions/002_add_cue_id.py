"""Add cue_id to habits.

Revision ID: 002_add_cue_id
Revises: 001_create_habits
Create Date: 2026-10-19

Keeps the cue's identity stable across loads. Rows written before this
revision get a fresh cue id on their next read.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_add_cue_id"
down_revision: Union[str, None] = "001_create_habits"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column("habits", sa.Column("cue_id", sa.String(36), nullable=True))


def downgrade() -> None:
    op.drop_column("habits", "cue_id")
