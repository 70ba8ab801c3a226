"""Persisted customer cart."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from weekly_orders.db.base import Base


class CartRecord(Base):
    """Serialized cart keyed by an opaque client token."""

    __tablename__ = "carts"

    token: Mapped[str] = mapped_column(String(64), primary_key=True)
    lines: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
