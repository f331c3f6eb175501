"""Device ORM — persisted row for a catalog device.

Invariants:
    - id is a 64-bit autoincrement primary key (INTEGER on SQLite so rowid aliasing works)
    - (name, brand) unique via uq_devices_name_brand
    - state stores the wire spelling ("available" | "in-use" | "inactive")
    - created_at set on insert (client default + server default), never updated

Design Decisions:
    - state as String over DB enum: matches the wire spelling, no ALTER TYPE on new states
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from devices_api.db.base import Base


class Device(Base):
    """Device row — one per (name, brand)."""
    __tablename__ = "devices"
    __table_args__ = (
        UniqueConstraint("name", "brand", name="uq_devices_name_brand"),
    )

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    brand: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    state: Mapped[str] = mapped_column(
        String(20), nullable=False, default="inactive", index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )
