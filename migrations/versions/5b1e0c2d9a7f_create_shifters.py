"""create shifters

Revision ID: 5b1e0c2d9a7f
Revises:
Create Date: 2026-10-19 10:12:44.318027

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5b1e0c2d9a7f"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the fingerprint -> membership number table."""
    op.create_table(
        "shifters",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("fingerprint", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_shifters_fingerprint", "shifters", ["fingerprint"], unique=True)


def downgrade() -> None:
    """Drop the shifters table."""
    op.drop_index("ix_shifters_fingerprint", table_name="shifters")
    op.drop_table("shifters")
