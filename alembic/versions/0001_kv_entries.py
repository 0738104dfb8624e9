"""key-value storage table

Revision ID: 0001_kv_entries
Revises:
Create Date: 2026-10-18

"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0001_kv_entries"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "kv_entries",
        sa.Column("key", sa.String(64), primary_key=True, comment="Logical storage key"),
        sa.Column("value", sa.Text, nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )


def downgrade():
    op.drop_table("kv_entries")
