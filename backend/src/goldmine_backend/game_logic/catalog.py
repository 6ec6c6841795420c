"""Static equipment catalog shared by every request in the process."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from goldmine_backend.game_logic.errors import ValidationError
from goldmine_backend.shared.enums import EquipmentKind


class EquipmentSpec(BaseModel):
    """Price and gold output of a single pickaxe tier."""

    model_config = ConfigDict(frozen=True)

    display_name: str = Field(..., min_length=1)
    cost_sol: float = Field(..., gt=0)
    rate_per_second: float = Field(..., gt=0)


class EquipmentCatalog(Mapping[EquipmentKind, EquipmentSpec]):
    """Read-only mapping from equipment kind to its specification."""

    def __init__(self, specs: Mapping[EquipmentKind, EquipmentSpec]) -> None:
        missing = [kind for kind in EquipmentKind if kind not in specs]
        if missing:
            msg = f"Catalog is missing equipment kinds: {', '.join(missing)}"
            raise ValueError(msg)
        ordered = [specs[kind] for kind in EquipmentKind]
        for lower, higher in zip(ordered, ordered[1:], strict=False):
            if higher.rate_per_second <= lower.rate_per_second:
                msg = "Equipment rates must strictly increase with tier."
                raise ValueError(msg)
        self._specs = MappingProxyType({kind: specs[kind] for kind in EquipmentKind})

    def __getitem__(self, kind: EquipmentKind) -> EquipmentSpec:
        return self._specs[kind]

    def __iter__(self) -> Iterator[EquipmentKind]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def parse_kind(self, value: object) -> EquipmentKind:
        """Return the equipment kind named by *value* or raise ``ValidationError``."""
        try:
            return EquipmentKind(str(value))
        except ValueError as exc:
            msg = f"unknown pickaxe type '{value}'"
            raise ValidationError(msg) from exc

    def as_public_dict(self) -> dict[str, dict[str, float | str]]:
        """Return the catalog in the shape published to clients."""
        return {
            kind.value: {
                "name": spec.display_name,
                "costSol": spec.cost_sol,
                "ratePerSec": spec.rate_per_second,
            }
            for kind, spec in self._specs.items()
        }


DEFAULT_CATALOG = EquipmentCatalog(
    {
        EquipmentKind.SILVER: EquipmentSpec(
            display_name="Silver", cost_sol=0.001, rate_per_second=1 / 60
        ),
        EquipmentKind.GOLD: EquipmentSpec(
            display_name="Gold", cost_sol=0.001, rate_per_second=10 / 60
        ),
        EquipmentKind.DIAMOND: EquipmentSpec(
            display_name="Diamond", cost_sol=0.001, rate_per_second=100 / 60
        ),
        EquipmentKind.NETHERITE: EquipmentSpec(
            display_name="Netherite", cost_sol=0.001, rate_per_second=10000 / 60
        ),
    }
)


__all__ = ["DEFAULT_CATALOG", "EquipmentCatalog", "EquipmentSpec"]
