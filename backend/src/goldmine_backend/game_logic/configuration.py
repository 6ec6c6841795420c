"""Economic configuration for gold accrual, purchases and cash-out."""

from __future__ import annotations

from functools import cache

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from goldmine_backend.shared.enums import SignaturePosture


class EconomyDefaults(BaseSettings):
    """Load default economic parameters from the environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GOLDMINE_ECONOMY_",
        extra="ignore",
    )

    gold_price_sol: float = Field(default=0.00001, gt=0)
    min_sell_gold: float = Field(default=10_000, ge=0)
    sell_tolerance: float = Field(default=0.01, ge=0)
    client_gold_window_seconds: int = Field(default=7_200, ge=0)
    client_gold_buffer: float = Field(default=500, ge=0)
    land_cost_sol: float = Field(default=0.01, gt=0)
    min_quantity: int = Field(default=1, ge=1)
    max_quantity: int = Field(default=1_000, ge=1)
    signature_posture: SignaturePosture = SignaturePosture.PERMISSIVE
    land_required_for_equipment: bool = True
    signature_min_length: int = Field(default=80, ge=1)
    signature_max_length: int = Field(default=90, ge=1)

    def to_config(self) -> EconomyConfiguration:
        """Convert defaults into an immutable configuration object."""
        return EconomyConfiguration(**self.model_dump())


class EconomyConfiguration(BaseModel):
    """Immutable representation of the economic parameters in effect."""

    model_config = ConfigDict(frozen=True)

    gold_price_sol: float = Field(default=0.00001, gt=0)
    min_sell_gold: float = Field(default=10_000, ge=0)
    sell_tolerance: float = Field(default=0.01, ge=0)
    client_gold_window_seconds: int = Field(default=7_200, ge=0)
    client_gold_buffer: float = Field(default=500, ge=0)
    land_cost_sol: float = Field(default=0.01, gt=0)
    min_quantity: int = Field(default=1, ge=1)
    max_quantity: int = Field(default=1_000, ge=1)
    signature_posture: SignaturePosture = SignaturePosture.PERMISSIVE
    land_required_for_equipment: bool = True
    signature_min_length: int = Field(default=80, ge=1)
    signature_max_length: int = Field(default=90, ge=1)

    @model_validator(mode="after")
    def _validate_bounds(self) -> EconomyConfiguration:
        """Ensure every lower bound sits below its upper bound."""
        if self.min_quantity > self.max_quantity:
            msg = "min_quantity must not exceed max_quantity."
            raise ValueError(msg)
        if self.signature_min_length > self.signature_max_length:
            msg = "signature_min_length must not exceed signature_max_length."
            raise ValueError(msg)
        return self

    def clamp_quantity(self, quantity: int) -> int:
        """Clamp *quantity* into the allowed purchase range."""
        return max(self.min_quantity, min(self.max_quantity, quantity))


@cache
def get_default_economy_configuration() -> EconomyConfiguration:
    """Return the cached default economic configuration."""
    return EconomyDefaults().to_config()


__all__ = [
    "EconomyConfiguration",
    "EconomyDefaults",
    "get_default_economy_configuration",
]
