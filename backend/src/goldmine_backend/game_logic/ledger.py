"""Checkpoint ledger: derive current gold and roll checkpoints forward.

A checkpoint stores the balance at an instant together with the accrual rate
that applies from then on. Any change to the rate (new equipment) or to the
balance (spending, cash-out) is folded in by taking a new checkpoint, so gold
earned under the old rate is never recalculated with the new one.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from goldmine_backend.game_logic.catalog import DEFAULT_CATALOG, EquipmentCatalog
from goldmine_backend.game_logic.errors import InsufficientFundsError, ValidationError
from goldmine_backend.game_logic.rates import compute_rate
from goldmine_backend.shared.value_objects import Checkpoint

if TYPE_CHECKING:
    from goldmine_backend.game_logic.state import PlayerAccount

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def now_seconds() -> int:
    """Return the current wall-clock time in whole seconds since the epoch."""
    return int(time.time())


def elapsed_seconds(checkpoint: Checkpoint, now: int) -> int:
    """Return seconds since *checkpoint*, clamped at zero for skewed clocks."""
    return max(0, now - checkpoint.snapshot_timestamp)


def current_gold(checkpoint: Checkpoint, now: int) -> float:
    """Extrapolate the balance held at *now* from *checkpoint*."""
    accrued = checkpoint.accrual_rate_per_minute / 60 * elapsed_seconds(checkpoint, now)
    return checkpoint.snapshot_gold + accrued


def take_checkpoint(
    account: PlayerAccount,
    now: int,
    catalog: EquipmentCatalog = DEFAULT_CATALOG,
) -> tuple[PlayerAccount, float]:
    """Fold accrued gold into a fresh checkpoint using the account's inventory.

    Returns the updated account together with the gold held at the checkpoint.
    Call once before and once after every inventory change.
    """
    gold = current_gold(account.checkpoint, now)
    checkpoint = Checkpoint(
        snapshot_gold=gold,
        snapshot_timestamp=max(now, account.checkpoint.snapshot_timestamp),
        accrual_rate_per_minute=compute_rate(account.inventory, catalog),
    )
    logger.debug(
        "Checkpoint for %s: gold=%.2f rate=%.2f/min",
        account.address[:8],
        gold,
        checkpoint.accrual_rate_per_minute,
    )
    return account.model_copy(update={"checkpoint": checkpoint}), gold


def debit_gold(
    account: PlayerAccount, amount: float, now: int
) -> tuple[PlayerAccount, float]:
    """Remove *amount* from the balance at *now*, keeping the accrual rate.

    Returns the updated account and the remaining balance. Raises
    ``InsufficientFundsError`` rather than letting the balance go negative.
    """
    if amount < 0:
        msg = "debit amount must be non-negative"
        raise ValidationError(msg)
    gold = current_gold(account.checkpoint, now)
    if gold < amount:
        raise InsufficientFundsError(balance=gold, required=amount)
    remaining = gold - amount
    checkpoint = Checkpoint(
        snapshot_gold=remaining,
        snapshot_timestamp=max(now, account.checkpoint.snapshot_timestamp),
        accrual_rate_per_minute=account.checkpoint.accrual_rate_per_minute,
    )
    return account.model_copy(update={"checkpoint": checkpoint}), remaining


__all__ = [
    "Clock",
    "current_gold",
    "debit_gold",
    "elapsed_seconds",
    "now_seconds",
    "take_checkpoint",
]
