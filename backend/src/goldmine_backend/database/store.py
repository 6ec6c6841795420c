"""Relational implementation of the user store."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from goldmine_backend.database.repositories import PlayerRepository, to_account
from goldmine_backend.game_logic.errors import PersistenceError
from goldmine_backend.game_logic.ledger import Clock, now_seconds
from goldmine_backend.game_logic.state import PlayerAccount

if TYPE_CHECKING:
    from collections.abc import Callable

    from goldmine_backend.database.service import DatabaseService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlUserStore:
    """Persist accounts through SQLAlchemy, one transaction per call.

    SQLAlchemy sessions block, so every call runs in a worker thread.
    """

    def __init__(self, database: DatabaseService, *, clock: Clock = now_seconds) -> None:
        self._database = database
        self._clock = clock

    async def init(self) -> None:
        try:
            await asyncio.to_thread(self._database.create_schema)
        except SQLAlchemyError as exc:
            msg = "database is unavailable"
            raise PersistenceError(msg) from exc

    async def close(self) -> None:
        await asyncio.to_thread(self._database.dispose)

    async def get_player(self, address: str) -> PlayerAccount:
        account = await self._run(self._load, address)
        if account is None:
            return PlayerAccount.new(address, self._clock())
        return account

    async def put_player(self, account: PlayerAccount) -> None:
        await self._run(self._save, account)

    async def list_addresses(self) -> tuple[str, ...]:
        return await self._run(self._wallets)

    async def _run(self, func: Callable[..., T], *args: object) -> T:
        try:
            return await asyncio.to_thread(func, *args)
        except SQLAlchemyError as exc:
            logger.error("Database operation %s failed: %s", func.__name__, exc)
            msg = "storage failure"
            raise PersistenceError(msg) from exc

    def _load(self, address: str) -> PlayerAccount | None:
        with self._database.session() as session:
            row = PlayerRepository(session).get(address)
            return to_account(row) if row is not None else None

    def _save(self, account: PlayerAccount) -> None:
        with self._database.session() as session:
            PlayerRepository(session).upsert(account)

    def _wallets(self) -> tuple[str, ...]:
        with self._database.session() as session:
            return tuple(PlayerRepository(session).list_wallets())


__all__ = ["SqlUserStore"]
