"""Pydantic models for account status endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from goldmine_backend.api.models.base import ApiModel

if TYPE_CHECKING:
    from goldmine_backend.api.services import AccountView
    from goldmine_backend.game_logic import PlayerAccount
    from goldmine_backend.shared import Checkpoint


class CheckpointResponse(ApiModel):
    """Public view of the stored checkpoint."""

    snapshot_gold: float
    snapshot_timestamp: int
    accrual_rate_per_minute: float

    @classmethod
    def from_checkpoint(cls, checkpoint: Checkpoint) -> CheckpointResponse:
        return cls(
            snapshot_gold=checkpoint.snapshot_gold,
            snapshot_timestamp=checkpoint.snapshot_timestamp,
            accrual_rate_per_minute=checkpoint.accrual_rate_per_minute,
        )


class StatusResponse(ApiModel):
    """Inventory, rate and current gold for a player."""

    address: str
    inventory: dict[str, int]
    total_rate: float
    rate_per_minute: float
    gold: float
    has_land: bool
    checkpoint: CheckpointResponse

    @classmethod
    def from_view(cls, view: AccountView) -> StatusResponse:
        account = view.account
        return cls(
            address=account.address,
            inventory=account.inventory.as_dict(),
            total_rate=view.rate_per_second,
            rate_per_minute=account.checkpoint.accrual_rate_per_minute,
            gold=view.gold,
            has_land=account.has_land,
            checkpoint=CheckpointResponse.from_checkpoint(account.checkpoint),
        )


class LandStatusResponse(ApiModel):
    """Land ownership for a player."""

    has_land: bool
    land_purchase_date: int | None = None

    @classmethod
    def from_account(cls, account: PlayerAccount) -> LandStatusResponse:
        return cls(has_land=account.has_land, land_purchase_date=account.land_purchase_date)


class ConfigResponse(ApiModel):
    """Catalog, prices and chain settings published to clients."""

    pickaxes: dict[str, dict[str, Any]]
    gold_price_sol: float
    min_sell_gold: float
    land_cost_sol: float
    cluster_url: str
    treasury: str | None = None
