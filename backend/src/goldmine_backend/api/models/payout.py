"""Pydantic models for selling gold and draining pending payouts."""

from __future__ import annotations

from goldmine_backend.api.models.base import ApiModel


class SellRequest(ApiModel):
    """Cash out gold; client-side figures are optional and only cross-checked."""

    address: str | None = None
    amount_gold: float | None = None
    client_gold: float | None = None
    client_inventory: dict[str, int] | None = None


class SellResponse(ApiModel):
    """Outcome of a committed sell."""

    ok: bool = True
    payout_sol: float
    amount_gold: float
    new_gold: float
    mode: str
    signature: str | None = None
    note: str | None = None


class PayoutRecordResponse(ApiModel):
    """Public view of a pending payout."""

    address: str
    amount_gold: float
    payout_sol: float
    ts: int
    error: str | None = None
    in_flight: bool = False


class AdminPriceRequest(ApiModel):
    """Change the SOL price paid per gold."""

    token: str | None = None
    gold_price_sol: float | None = None


class AdminPriceResponse(ApiModel):
    gold_price_sol: float


class DrainPayoutsRequest(ApiModel):
    """Retry the pending payouts of one address."""

    token: str | None = None
    address: str | None = None


class DrainPayoutsResponse(ApiModel):
    """Counts and leftovers of a drain."""

    dispatched: int
    remaining: int
    pending: list[PayoutRecordResponse]
