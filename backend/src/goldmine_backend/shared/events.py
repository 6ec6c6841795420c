"""Audit event primitives shared across the backend."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class AuditEventType(StrEnum):
    """Signals worth keeping for later review of suspicious activity."""

    SELL_CLAMPED = "sell_clamped"
    INVENTORY_MISMATCH = "inventory_mismatch"
    GOLD_CLAIM_REJECTED = "gold_claim_rejected"
    SIGNATURE_UNVERIFIED = "signature_unverified"


class AuditEvent(BaseModel):
    """Represents a single immutable audit entry tied to a player address."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., min_length=1)
    event_type: AuditEventType
    message: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


__all__ = ["AuditEvent", "AuditEventType"]
