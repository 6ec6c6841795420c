"""Payment collaborator used to send cash-out proceeds to players."""

from __future__ import annotations

from typing import Protocol

from goldmine_backend.game_logic.errors import PayoutDispatchError


class PaymentGateway(Protocol):
    """Protocol for sending funds from the treasury to a player wallet."""

    async def dispatch(self, to_address: str, amount_sol: float) -> str:
        """Send *amount_sol* to *to_address* and return the transaction signature.

        Raises :class:`PayoutDispatchError` when nothing was sent.
        """


class UnconfiguredPaymentGateway:
    """Gateway used when the server holds no treasury key.

    Every dispatch fails, so each cash-out is recorded as a pending payout for
    out-of-band reconciliation.
    """

    async def dispatch(self, to_address: str, amount_sol: float) -> str:
        msg = "Server not configured to auto pay. Recorded pending payout."
        raise PayoutDispatchError(msg, {"address": to_address, "payoutSol": amount_sol})


__all__ = ["PaymentGateway", "UnconfiguredPaymentGateway"]
