"""Player-centric state containers used by the game logic layer."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from goldmine_backend.shared.enums import EquipmentKind
from goldmine_backend.shared.value_objects import Checkpoint, PayoutRecord


class Inventory(BaseModel):
    """Owned pickaxe counts, always covering every known equipment kind."""

    model_config = ConfigDict(frozen=True)

    counts: dict[EquipmentKind, int] = Field(default_factory=dict, validate_default=True)

    @field_validator("counts", mode="before")
    @classmethod
    def _fill_missing_kinds(cls, value: object) -> dict[EquipmentKind, int]:
        """Default absent kinds to zero and drop names outside the catalog."""
        raw = dict(value or {}) if isinstance(value, Mapping) else {}
        counts: dict[EquipmentKind, int] = {}
        for kind in EquipmentKind:
            amount = raw.get(kind.value, 0)
            amount = int(amount or 0)
            if amount < 0:
                msg = f"Inventory count for {kind.value} must be non-negative."
                raise ValueError(msg)
            counts[kind] = amount
        return counts

    def count(self, kind: EquipmentKind) -> int:
        """Return the owned count for *kind*."""
        return self.counts[kind]

    def add(self, kind: EquipmentKind, quantity: int) -> Inventory:
        """Return a new inventory with *quantity* more of *kind*."""
        if quantity < 0:
            msg = "Quantity added to an inventory must be non-negative."
            raise ValueError(msg)
        counts = dict(self.counts)
        counts[kind] += quantity
        return Inventory(counts=counts)

    def as_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of kind name to count."""
        return {kind.value: amount for kind, amount in self.counts.items()}


class PlayerAccount(BaseModel):
    """Everything stored for one wallet address.

    Accounts are replaced wholesale on every mutation; nothing updates a stored
    account in place.
    """

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., min_length=1)
    inventory: Inventory = Field(default_factory=Inventory)
    checkpoint: Checkpoint
    has_land: bool = False
    land_purchase_date: int | None = None
    last_activity: int = Field(..., ge=0)
    pending_payouts: tuple[PayoutRecord, ...] = Field(default_factory=tuple)

    @classmethod
    def new(cls, address: str, now: int) -> PlayerAccount:
        """Return the zeroed account created on first reference to *address*."""
        return cls(
            address=address,
            inventory=Inventory(),
            checkpoint=Checkpoint.zero(now),
            has_land=False,
            land_purchase_date=None,
            last_activity=now,
        )

    def touch(self, now: int) -> PlayerAccount:
        """Return a copy with ``last_activity`` moved to *now*."""
        return self.model_copy(update={"last_activity": max(self.last_activity, now)})


__all__ = ["Inventory", "PlayerAccount"]
