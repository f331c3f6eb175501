"""Create devices table with (name, brand) uniqueness.

Revision ID: 001_devices
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_devices"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "devices",
        sa.Column(
            "id", sa.BigInteger().with_variant(sa.Integer, "sqlite"),
            primary_key=True, autoincrement=True,
        ),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("brand", sa.Text, nullable=False),
        sa.Column("state", sa.String(20), nullable=False, server_default="inactive"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("name", "brand", name="uq_devices_name_brand"),
    )
    op.create_index("ix_devices_brand", "devices", ["brand"])
    op.create_index("ix_devices_state", "devices", ["state"])


def downgrade() -> None:
    op.drop_index("ix_devices_state", table_name="devices")
    op.drop_index("ix_devices_brand", table_name="devices")
    op.drop_table("devices")
