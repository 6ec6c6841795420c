"""Pydantic models for land and pickaxe purchase endpoints."""

from __future__ import annotations

from pydantic import Field

from goldmine_backend.api.models.base import ApiModel
from goldmine_backend.api.models.status import CheckpointResponse  # noqa: TC001


class BuyWithGoldRequest(ApiModel):
    """Spend gold on one pickaxe."""

    address: str | None = None
    pickaxe_type: str | None = None
    gold_cost: float | None = None


class BuyWithGoldResponse(ApiModel):
    """Account state after spending gold."""

    success: bool = True
    new_gold: float
    inventory: dict[str, int]
    checkpoint: CheckpointResponse
    message: str


class PurchaseQuoteRequest(ApiModel):
    """Ask what a pickaxe order costs in SOL."""

    address: str | None = None
    pickaxe_type: str | None = None
    quantity: int | str | None = None


class PurchaseQuoteResponse(ApiModel):
    """Amount to transfer to the treasury for a pickaxe order."""

    pickaxe_type: str
    quantity: int
    cost_sol: float
    cost_lamports: int
    treasury: str | None = None


class LandQuoteRequest(ApiModel):
    """Ask what land costs in SOL."""

    address: str | None = None


class LandQuoteResponse(ApiModel):
    """Amount to transfer to the treasury for land."""

    land_cost_sol: float
    cost_lamports: int
    treasury: str | None = None


class PurchaseConfirmRequest(ApiModel):
    """Claim pickaxes paid for by an on-chain transfer."""

    address: str | None = None
    pickaxe_type: str | None = None
    signature: str | None = None
    quantity: int | str | None = None


class PurchaseConfirmResponse(ApiModel):
    """Account state after pickaxes were granted."""

    ok: bool = True
    status: str
    pickaxe_type: str
    quantity: int = Field(ge=1)
    inventory: dict[str, int]
    total_rate: float
    gold: float
    checkpoint: CheckpointResponse


class LandConfirmRequest(ApiModel):
    """Claim land paid for by an on-chain transfer."""

    address: str | None = None
    signature: str | None = None


class LandConfirmResponse(ApiModel):
    """Account state after land was granted."""

    ok: bool = True
    status: str
    has_land: bool
    inventory: dict[str, int]
    message: str
