"""Counter table — single versioned record.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

from counter_service.config import settings

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        settings.counter_table,
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("value", sa.BigInteger, nullable=False),
        sa.Column("version", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column(
            "updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()
        ),
        sa.CheckConstraint(
            f"value >= {settings.min_counter_value} AND value <= {settings.max_counter_value}",
            name=f"ck_{settings.counter_table}_value_range",
        ),
    )


def downgrade() -> None:
    op.drop_table(settings.counter_table)
