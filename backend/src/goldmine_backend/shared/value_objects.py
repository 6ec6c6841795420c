"""Immutable value objects shared across the domain layer."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Checkpoint(BaseModel):
    """Snapshot of a player's gold balance, the time it was taken and the rate.

    Current gold is never stored; it is extrapolated from the latest checkpoint
    whenever it is needed.
    """

    model_config = ConfigDict(frozen=True)

    snapshot_gold: float = Field(..., ge=0)
    snapshot_timestamp: int = Field(..., ge=0)
    accrual_rate_per_minute: float = Field(default=0.0, ge=0)

    @classmethod
    def zero(cls, now: int) -> Checkpoint:
        """Return the checkpoint assigned to a freshly created account."""
        return cls(snapshot_gold=0.0, snapshot_timestamp=now, accrual_rate_per_minute=0.0)


class PayoutRecord(BaseModel):
    """A cash-out that was debited from the ledger but not yet paid.

    ``in_flight`` marks a record whose dispatch is still being attempted by the
    sell that wrote it; drains leave such records alone.
    """

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., min_length=1)
    amount_gold: float = Field(..., ge=0)
    payout_sol: float = Field(..., ge=0)
    ts: int = Field(..., ge=0)
    error: str | None = None
    in_flight: bool = False


__all__ = ["Checkpoint", "PayoutRecord"]
