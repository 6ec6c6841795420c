"""Accrual rate derived from owned equipment."""

from __future__ import annotations

from typing import TYPE_CHECKING

from goldmine_backend.game_logic.catalog import DEFAULT_CATALOG, EquipmentCatalog

if TYPE_CHECKING:
    from goldmine_backend.game_logic.state import Inventory


def rate_per_second(
    inventory: Inventory, catalog: EquipmentCatalog = DEFAULT_CATALOG
) -> float:
    """Return gold produced per second by every pickaxe in *inventory*."""
    return sum(
        inventory.count(kind) * spec.rate_per_second for kind, spec in catalog.items()
    )


def compute_rate(
    inventory: Inventory, catalog: EquipmentCatalog = DEFAULT_CATALOG
) -> float:
    """Return the accrual rate for *inventory* expressed in gold per minute."""
    return rate_per_second(inventory, catalog) * 60


__all__ = ["compute_rate", "rate_per_second"]
