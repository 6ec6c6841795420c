"""Cash-out of gold for SOL.

The ledger debit is committed, together with an in-flight payout record, before
any payment is attempted and is never rolled back. A payment that cannot be sent
turns that record into a pending payout, which an operator drains later.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from goldmine_backend.game_logic.errors import PayoutDispatchError, PersistenceError
from goldmine_backend.game_logic.ledger import Clock, debit_gold, now_seconds
from goldmine_backend.shared.enums import PayoutMode
from goldmine_backend.shared.value_objects import PayoutRecord

if TYPE_CHECKING:
    from goldmine_backend.game_logic.anticheat import SellDecision, SellValidator
    from goldmine_backend.game_logic.configuration import EconomyConfiguration
    from goldmine_backend.game_logic.locks import AddressLocks
    from goldmine_backend.game_logic.payments import PaymentGateway
    from goldmine_backend.game_logic.persistence import UserStore

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class SellOutcome:
    """Result of a committed sell, whether or not the payment went out."""

    decision: SellDecision
    payout_sol: float
    new_gold: float
    mode: PayoutMode
    signature: str | None = None
    note: str | None = None


@dataclass(slots=True, frozen=True)
class DrainReport:
    """Pending payouts sent and left behind by :meth:`PayoutFlow.drain_pending`."""

    dispatched: tuple[PayoutRecord, ...]
    remaining: tuple[PayoutRecord, ...]


class PayoutFlow:
    """Validate, debit and pay out sell requests."""

    def __init__(
        self,
        *,
        store: UserStore,
        locks: AddressLocks,
        validator: SellValidator,
        gateway: PaymentGateway,
        config: EconomyConfiguration,
        clock: Clock = now_seconds,
    ) -> None:
        self._store = store
        self._locks = locks
        self._validator = validator
        self._gateway = gateway
        self._config = config
        self._clock = clock

    def update_configuration(self, config: EconomyConfiguration) -> None:
        self._config = config

    async def sell(
        self,
        address: str,
        amount_gold: float,
        *,
        client_gold: float | None = None,
        client_inventory: Mapping[str, int] | None = None,
    ) -> SellOutcome:
        """Convert *amount_gold* into SOL for *address*.

        The debit and an in-flight payout record are written together, so a
        payment that fails in any way leaves a pending payout behind.
        """
        async with self._locks.hold(address):
            account = await self._store.get_player(address)
            decision = self._validator.validate(
                account,
                amount_gold,
                self._clock(),
                client_gold=client_gold,
                client_inventory=client_inventory,
            )
            if decision.clamped:
                logger.warning(
                    "Sell amount adjusted for %s... Requested: %s, Allowed: %.2f",
                    address[:8],
                    decision.requested,
                    decision.allowed,
                )
            now = self._clock()
            account, remaining = debit_gold(account, decision.allowed, now)
            payout_sol = decision.allowed * self._config.gold_price_sol
            record = PayoutRecord(
                address=address,
                amount_gold=decision.allowed,
                payout_sol=payout_sol,
                ts=now,
                in_flight=True,
            )
            account = account.model_copy(
                update={"pending_payouts": (*account.pending_payouts, record)}
            ).touch(now)
            await self._store.put_player(account)

        logger.info(
            "%s sold %.2f gold for %s SOL. Remaining gold: %.2f",
            address,
            decision.allowed,
            payout_sol,
            remaining,
        )
        try:
            signature = await self._gateway.dispatch(address, payout_sol)
        except Exception as exc:
            reason = _failure_reason(exc)
            logger.error("Payout of %s SOL to %s failed: %s", payout_sol, address, reason)
            await self._settle(
                record, record.model_copy(update={"in_flight": False, "error": reason})
            )
            return SellOutcome(
                decision=decision,
                payout_sol=payout_sol,
                new_gold=remaining,
                mode=PayoutMode.PENDING,
                note=reason,
            )
        await self._settle(record, None)
        return SellOutcome(
            decision=decision,
            payout_sol=payout_sol,
            new_gold=remaining,
            mode=PayoutMode.IMMEDIATE,
            signature=signature,
        )

    async def _settle(self, record: PayoutRecord, replacement: PayoutRecord | None) -> None:
        """Replace the in-flight *record*, or drop it when *replacement* is None.

        A storage failure here leaves the record in flight, which keeps the
        obligation on file without letting a drain pay it twice.
        """
        try:
            async with self._locks.hold(record.address):
                account = await self._store.get_player(record.address)
                pending = list(account.pending_payouts)
                if record not in pending:
                    return
                index = pending.index(record)
                if replacement is None:
                    del pending[index]
                else:
                    pending[index] = replacement
                await self._store.put_player(
                    account.model_copy(update={"pending_payouts": tuple(pending)})
                )
        except PersistenceError as exc:
            logger.error(
                "Could not settle payout of %s SOL to %s, left in flight: %s",
                record.payout_sol,
                record.address,
                exc.reason,
            )

    async def drain_pending(self, address: str) -> DrainReport:
        """Retry every failed payout for *address*, keeping those that fail again."""
        async with self._locks.hold(address):
            account = await self._store.get_player(address)
            queued = tuple(r for r in account.pending_payouts if not r.in_flight)
            if not queued:
                return DrainReport(dispatched=(), remaining=account.pending_payouts)
            in_flight = tuple(r for r in account.pending_payouts if r.in_flight)
            await self._store.put_player(
                account.model_copy(update={"pending_payouts": in_flight})
            )

        dispatched: list[PayoutRecord] = []
        failed: list[PayoutRecord] = []
        for record in queued:
            try:
                await self._gateway.dispatch(record.address, record.payout_sol)
            except Exception as exc:
                failed.append(record.model_copy(update={"error": _failure_reason(exc)}))
            else:
                dispatched.append(record)

        async with self._locks.hold(address):
            account = await self._store.get_player(address)
            remaining = (*failed, *account.pending_payouts)
            if failed:
                await self._store.put_player(
                    account.model_copy(update={"pending_payouts": remaining})
                )

        logger.info(
            "Drained payouts for %s: %d sent, %d still pending",
            address,
            len(dispatched),
            len(remaining),
        )
        return DrainReport(dispatched=tuple(dispatched), remaining=remaining)


def _failure_reason(exc: Exception) -> str:
    if isinstance(exc, PayoutDispatchError):
        return exc.reason
    return f"payout dispatch failed: {exc}"


__all__ = ["DrainReport", "PayoutFlow", "SellOutcome"]
