"""Land and equipment purchases.

Every inventory change is wrapped in a checkpoint taken immediately before it
and another taken immediately after it, so that gold accrued under the old rate
is banked before the new rate takes effect.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from goldmine_backend.game_logic.catalog import DEFAULT_CATALOG, EquipmentCatalog
from goldmine_backend.game_logic.errors import (
    AlreadyOwnsError,
    LandRequiredError,
    ValidationError,
)
from goldmine_backend.game_logic.ledger import (
    Clock,
    current_gold,
    debit_gold,
    now_seconds,
    take_checkpoint,
)

if TYPE_CHECKING:
    from goldmine_backend.game_logic.chain import SignatureVerifier
    from goldmine_backend.game_logic.configuration import EconomyConfiguration
    from goldmine_backend.game_logic.locks import AddressLocks
    from goldmine_backend.game_logic.persistence import UserStore
    from goldmine_backend.game_logic.state import PlayerAccount
    from goldmine_backend.shared.enums import ConfirmationStatus, EquipmentKind

logger = logging.getLogger(__name__)

LAMPORTS_PER_SOL = 1_000_000_000


@dataclass(slots=True, frozen=True)
class PurchaseQuote:
    """Amount a wallet must transfer to the treasury for a pickaxe order."""

    kind: EquipmentKind
    quantity: int
    cost_sol: float
    cost_lamports: int


@dataclass(slots=True, frozen=True)
class LandQuote:
    """Amount a wallet must transfer to the treasury for land."""

    cost_sol: float
    cost_lamports: int


@dataclass(slots=True, frozen=True)
class PurchaseResult:
    """Account state after a completed purchase."""

    account: PlayerAccount
    gold: float
    quantity: int = 1
    status: ConfirmationStatus | None = None


def parse_quantity(value: object, config: EconomyConfiguration) -> int:
    """Return *value* as an order quantity clamped to the configured range."""
    if value is None or value == "":
        return config.min_quantity
    if isinstance(value, bool):
        msg = "quantity must be an integer"
        raise ValidationError(msg)
    try:
        quantity = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError) as exc:
        msg = "quantity must be an integer"
        raise ValidationError(msg) from exc
    return config.clamp_quantity(quantity)


class PurchaseFlow:
    """Orchestrate land and pickaxe purchases against the user store."""

    def __init__(
        self,
        *,
        store: UserStore,
        locks: AddressLocks,
        verifier: SignatureVerifier,
        config: EconomyConfiguration,
        catalog: EquipmentCatalog = DEFAULT_CATALOG,
        clock: Clock = now_seconds,
    ) -> None:
        self._store = store
        self._locks = locks
        self._verifier = verifier
        self._config = config
        self._catalog = catalog
        self._clock = clock

    def update_configuration(self, config: EconomyConfiguration) -> None:
        self._config = config

    def _require_land(self, account: PlayerAccount) -> None:
        if self._config.land_required_for_equipment and not account.has_land:
            msg = "Must own land before buying pickaxes"
            raise LandRequiredError(msg)

    async def quote_purchase(
        self, address: str, kind: EquipmentKind, quantity: object = None
    ) -> PurchaseQuote:
        """Price an order of *quantity* pickaxes of *kind* for *address*."""
        qty = parse_quantity(quantity, self._config)
        account = await self._store.get_player(address)
        self._require_land(account)
        unit_lamports = round(self._catalog[kind].cost_sol * LAMPORTS_PER_SOL)
        return PurchaseQuote(
            kind=kind,
            quantity=qty,
            cost_sol=self._catalog[kind].cost_sol * qty,
            cost_lamports=unit_lamports * qty,
        )

    async def quote_land(self, address: str) -> LandQuote:
        """Price land for *address*, refusing players that already own some."""
        account = await self._store.get_player(address)
        if account.has_land:
            msg = "User already owns land"
            raise AlreadyOwnsError(msg)
        cost_sol = self._config.land_cost_sol
        return LandQuote(cost_sol=cost_sol, cost_lamports=round(cost_sol * LAMPORTS_PER_SOL))

    async def confirm_purchase(
        self,
        address: str,
        kind: EquipmentKind,
        signature: object,
        quantity: object = None,
    ) -> PurchaseResult:
        """Grant pickaxes paid for by the transaction *signature*."""
        qty = parse_quantity(quantity, self._config)
        self._verifier.check_format(signature)
        self._require_land(await self._store.get_player(address))
        status = await self._verifier.verify(address, signature)

        async with self._locks.hold(address):
            now = self._clock()
            account = await self._store.get_player(address)
            self._require_land(account)
            account, _ = take_checkpoint(account, now, self._catalog)
            account = account.model_copy(
                update={"inventory": account.inventory.add(kind, qty)}
            )
            account, gold = take_checkpoint(account, now, self._catalog)
            account = account.touch(now)
            await self._store.put_player(account)

        logger.info(
            "Granted %dx %s pickaxe to %s (status=%s)", qty, kind.value, address, status.value
        )
        return PurchaseResult(account=account, gold=gold, quantity=qty, status=status)

    async def confirm_land_purchase(
        self, address: str, signature: object
    ) -> PurchaseResult:
        """Grant land paid for by the transaction *signature*, at most once."""
        account = await self._store.get_player(address)
        if account.has_land:
            msg = "User already owns land"
            raise AlreadyOwnsError(msg)
        status = await self._verifier.verify(address, signature)

        async with self._locks.hold(address):
            now = self._clock()
            account = await self._store.get_player(address)
            if account.has_land:
                msg = "User already owns land"
                raise AlreadyOwnsError(msg)
            account = account.model_copy(
                update={"has_land": True, "land_purchase_date": now}
            ).touch(now)
            await self._store.put_player(account)

        logger.info("Granted land to %s (status=%s)", address, status.value)
        return PurchaseResult(
            account=account, gold=current_gold(account.checkpoint, now), status=status
        )

    async def buy_with_gold(
        self, address: str, kind: EquipmentKind, cost: float
    ) -> PurchaseResult:
        """Spend *cost* gold on one pickaxe of *kind*."""
        if not isinstance(cost, int | float) or not math.isfinite(cost) or cost <= 0:
            msg = "goldCost must be a positive number"
            raise ValidationError(msg)

        async with self._locks.hold(address):
            now = self._clock()
            account = await self._store.get_player(address)
            self._require_land(account)
            account, _ = debit_gold(account, cost, now)
            account = account.model_copy(
                update={"inventory": account.inventory.add(kind, 1)}
            )
            account, gold = take_checkpoint(account, now, self._catalog)
            account = account.touch(now)
            await self._store.put_player(account)

        logger.info("%s... bought %s pickaxe for %s gold", address[:8], kind.value, cost)
        return PurchaseResult(account=account, gold=gold)


__all__ = [
    "LAMPORTS_PER_SOL",
    "LandQuote",
    "PurchaseFlow",
    "PurchaseQuote",
    "PurchaseResult",
    "parse_quantity",
]
