"""Persistence abstractions for player accounts and audit events.

The game logic layer only depends on these protocols. Concrete adapters
(in-memory, JSON file, relational database) are chosen at startup and passed
into the services explicitly.
"""

from __future__ import annotations

from typing import Protocol

from goldmine_backend.game_logic.ledger import Clock, now_seconds
from goldmine_backend.game_logic.state import PlayerAccount
from goldmine_backend.shared.events import AuditEvent  # noqa: TC001


class UserStore(Protocol):
    """Protocol describing how player accounts are persisted."""

    async def init(self) -> None:
        """Load or create the backing storage."""

    async def close(self) -> None:
        """Release resources held by the store."""

    async def get_player(self, address: str) -> PlayerAccount:
        """Return the account for *address*, building a zeroed one if absent."""

    async def put_player(self, account: PlayerAccount) -> None:
        """Persist *account*, replacing any previous value for its address."""

    async def list_addresses(self) -> tuple[str, ...]:
        """Return every address with a stored account."""


class AuditTrail(Protocol):
    """Protocol describing where cheat-detection signals are kept."""

    def record(self, event: AuditEvent) -> None:
        """Persist *event* after the existing events."""

    def fetch(self, address: str) -> tuple[AuditEvent, ...]:
        """Return the events recorded for *address* in order."""


class InMemoryUserStore:
    """Trivial in-memory implementation of :class:`UserStore`."""

    def __init__(self, *, clock: Clock = now_seconds) -> None:
        self._clock = clock
        self._accounts: dict[str, PlayerAccount] = {}

    async def init(self) -> None:
        """Nothing to load for an in-memory store."""

    async def close(self) -> None:
        """Nothing to release for an in-memory store."""

    async def get_player(self, address: str) -> PlayerAccount:
        """Return the stored account or a fresh one for *address*."""
        account = self._accounts.get(address)
        if account is None:
            return PlayerAccount.new(address, self._clock())
        return account

    async def put_player(self, account: PlayerAccount) -> None:
        """Store *account* keyed by its address."""
        self._accounts[account.address] = account

    async def list_addresses(self) -> tuple[str, ...]:
        """Return the stored addresses in insertion order."""
        return tuple(self._accounts)


class InMemoryAuditTrail:
    """Trivial in-memory implementation of :class:`AuditTrail`."""

    def __init__(self) -> None:
        self._events: dict[str, list[AuditEvent]] = {}

    def record(self, event: AuditEvent) -> None:
        """Append *event* to the sequence kept for its address."""
        self._events.setdefault(event.address, []).append(event)

    def fetch(self, address: str) -> tuple[AuditEvent, ...]:
        """Return all events stored for *address*."""
        return tuple(self._events.get(address, ()))


__all__ = [
    "AuditTrail",
    "InMemoryAuditTrail",
    "InMemoryUserStore",
    "UserStore",
]
