"""Server-side validation of cash-out requests.

The client reports how much gold it wants to sell and, optionally, what it
believes its inventory and balance are. None of that is trusted: the ledger is
recomputed, claims are checked against what accrual could have produced and the
requested amount is clamped to a provably reachable maximum.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from goldmine_backend.game_logic.errors import (
    InsufficientFundsError,
    InventoryDesyncError,
    SuspiciousGoldClaimError,
    ValidationError,
)
from goldmine_backend.game_logic.ledger import current_gold, elapsed_seconds
from goldmine_backend.shared.events import AuditEvent, AuditEventType

if TYPE_CHECKING:
    from goldmine_backend.game_logic.configuration import EconomyConfiguration
    from goldmine_backend.game_logic.persistence import AuditTrail
    from goldmine_backend.game_logic.state import PlayerAccount

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class SellDecision:
    """Outcome of validating a sell request against the ledger."""

    requested: float
    allowed: float
    current_gold: float

    @property
    def clamped(self) -> bool:
        return self.allowed != self.requested


class SellValidator:
    """Apply the cash-out checks in order: floor, inventory, gold claim, clamp."""

    def __init__(self, config: EconomyConfiguration, audit: AuditTrail) -> None:
        self._config = config
        self._audit = audit

    def validate(
        self,
        account: PlayerAccount,
        requested: float,
        now: int,
        *,
        client_gold: float | None = None,
        client_inventory: Mapping[str, int] | None = None,
    ) -> SellDecision:
        """Return the amount that may be sold or raise a domain error."""
        self.check_minimum(requested)
        if client_inventory is not None:
            self.check_inventory(account, client_inventory)
        if client_gold is not None:
            self.check_client_gold(account, client_gold, now)
        decision = self.clamp(account, requested, now)
        if decision.allowed <= 0:
            raise InsufficientFundsError(
                balance=decision.current_gold, required=decision.requested
            )
        return decision

    def check_minimum(self, requested: float) -> None:
        """Reject amounts that are not finite or fall below the selling floor."""
        if not math.isfinite(requested) or requested <= 0:
            msg = "amountGold must be a positive number"
            raise ValidationError(msg)
        if requested < self._config.min_sell_gold:
            msg = f"minimum sell is {self._config.min_sell_gold:g}"
            raise ValidationError(msg, {"minSellGold": self._config.min_sell_gold})

    def check_inventory(
        self, account: PlayerAccount, client_inventory: Mapping[str, int]
    ) -> None:
        """Require every reported pickaxe count to match the stored one."""
        server = account.inventory.as_dict()
        for name, reported in client_inventory.items():
            try:
                reported_count = int(reported)
            except (TypeError, ValueError) as exc:
                msg = f"invalid inventory count for {name}"
                raise ValidationError(msg) from exc
            stored = server.get(name, 0)
            if reported_count != stored:
                logger.warning(
                    "Sell attempt with inventory mismatch for %s: client %s=%s, server=%s",
                    account.address,
                    name,
                    reported_count,
                    stored,
                )
                self._audit.record(
                    AuditEvent(
                        address=account.address,
                        event_type=AuditEventType.INVENTORY_MISMATCH,
                        message=f"{name}: client={reported_count} server={stored}",
                        payload={"client": dict(client_inventory), "server": server},
                    )
                )
                raise InventoryDesyncError(server)

    def max_reachable_gold(self, account: PlayerAccount, now: int) -> float:
        """Return the most gold accrual could have produced within the window."""
        checkpoint = account.checkpoint
        window = min(elapsed_seconds(checkpoint, now), self._config.client_gold_window_seconds)
        return checkpoint.snapshot_gold + checkpoint.accrual_rate_per_minute / 60 * window

    def check_client_gold(
        self, account: PlayerAccount, client_gold: float, now: int
    ) -> None:
        """Reject client balances that accrual could not have reached."""
        max_possible = self.max_reachable_gold(account, now)
        if not math.isfinite(client_gold) or (
            client_gold > max_possible + self._config.client_gold_buffer
        ):
            logger.warning(
                "Suspicious sell attempt from %s: clientGold=%s, maxPossible=%.2f",
                account.address,
                client_gold,
                max_possible,
            )
            self._audit.record(
                AuditEvent(
                    address=account.address,
                    event_type=AuditEventType.GOLD_CLAIM_REJECTED,
                    message="client gold exceeds reachable maximum",
                    payload={"clientGold": client_gold, "maxPossible": max_possible},
                )
            )
            msg = "Gold amount validation failed. Please sync and try again."
            raise SuspiciousGoldClaimError(
                msg, {"currentGold": int(current_gold(account.checkpoint, now))}
            )

    def clamp(self, account: PlayerAccount, requested: float, now: int) -> SellDecision:
        """Clamp *requested* to the current balance plus the timing tolerance."""
        gold = current_gold(account.checkpoint, now)
        ceiling = max(0.0, gold * (1 + self._config.sell_tolerance))
        if requested > gold:
            logger.warning(
                "CHEAT DETECTED: %s tried to sell %s gold while holding %.2f",
                account.address[:8],
                requested,
                gold,
            )
            self._audit.record(
                AuditEvent(
                    address=account.address,
                    event_type=AuditEventType.SELL_CLAMPED,
                    message="requested amount exceeds current gold",
                    payload={"requested": requested, "currentGold": gold, "ceiling": ceiling},
                )
            )
        allowed = min(requested, ceiling)
        return SellDecision(requested=requested, allowed=allowed, current_gold=gold)


__all__ = ["SellDecision", "SellValidator"]
