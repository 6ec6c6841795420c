"""Player database schema."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, BigInteger, Boolean, DateTime, Float, String, func
from sqlalchemy.orm import Mapped, mapped_column

from goldmine_backend.database.base import BaseSchema


class PlayerSchema(BaseSchema):
    """SQLAlchemy model for player accounts keyed by wallet address."""

    __tablename__ = "players"

    wallet: Mapped[str] = mapped_column(String(64), primary_key=True)
    inventory: Mapped[dict[str, int]] = mapped_column(JSON, nullable=False, default=dict)
    last_checkpoint_gold: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    checkpoint_timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    total_mining_power: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    has_land: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    land_purchase_date: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    last_activity: Mapped[int] = mapped_column(BigInteger, nullable=False)
    pending_payouts: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
