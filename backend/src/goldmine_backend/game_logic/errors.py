"""Error taxonomy raised by the mining economy.

Every error carries a short ``reason`` for the caller and an optional ``detail``
mapping with authoritative values (balance, inventory) so that a client can
resynchronise instead of retrying blindly.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class MiningError(Exception):
    """Base class for all domain errors surfaced to callers."""

    def __init__(self, reason: str, detail: Mapping[str, Any] | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.detail: dict[str, Any] = dict(detail or {})


class ValidationError(MiningError):
    """Raised for malformed or missing input; no state is changed."""


class LandRequiredError(ValidationError):
    """Raised when equipment is bought before the player owns land."""


class SuspiciousGoldClaimError(ValidationError):
    """Raised when a client-reported gold figure is not reachable by accrual."""


class InsufficientFundsError(MiningError):
    """Raised when the authoritative balance cannot cover the request."""

    def __init__(self, balance: float, required: float) -> None:
        super().__init__(
            f"insufficient gold. You have {int(balance)} gold but need {required} gold.",
            {"currentGold": int(balance)},
        )
        self.balance = balance
        self.required = required


class AlreadyOwnsError(MiningError):
    """Raised when a player tries to buy land twice."""


class InventoryDesyncError(MiningError):
    """Raised when the client's inventory does not match the stored one."""

    def __init__(self, server_inventory: Mapping[str, int]) -> None:
        super().__init__(
            "Inventory mismatch detected. Please refresh and try again.",
            {"inventory": dict(server_inventory)},
        )
        self.server_inventory = dict(server_inventory)


class UnverifiableSignatureError(MiningError):
    """Raised when the chain-status collaborator fails or times out."""


class PersistenceError(MiningError):
    """Raised when the storage collaborator fails; nothing is assumed committed."""


class PayoutDispatchError(MiningError):
    """Raised by a payment gateway that could not send funds."""


__all__ = [
    "AlreadyOwnsError",
    "InsufficientFundsError",
    "InventoryDesyncError",
    "LandRequiredError",
    "MiningError",
    "PayoutDispatchError",
    "PersistenceError",
    "SuspiciousGoldClaimError",
    "UnverifiableSignatureError",
    "ValidationError",
]
