"""Per-address mutual exclusion for read-modify-write sequences."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class AddressLocks:
    """Hand out one :class:`asyncio.Lock` per player address.

    Every sequence that loads an account, takes checkpoints and writes it back
    must run under the lock for that address, otherwise two concurrent requests
    can both read the same checkpoint and the last write silently wins.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, address: str) -> AsyncIterator[None]:
        """Serialize the enclosed block against others for *address*."""
        lock = self._locks.setdefault(address, asyncio.Lock())
        self._waiters[address] = self._waiters.get(address, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[address] -= 1
            if self._waiters[address] == 0:
                del self._waiters[address]
                del self._locks[address]

    def active(self) -> int:
        """Return how many addresses currently have a lock in use."""
        return len(self._locks)


__all__ = ["AddressLocks"]
