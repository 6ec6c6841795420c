"""JSON-file implementation of the user store."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from goldmine_backend.game_logic.catalog import DEFAULT_CATALOG, EquipmentCatalog
from goldmine_backend.game_logic.errors import PersistenceError
from goldmine_backend.game_logic.ledger import Clock, now_seconds
from goldmine_backend.game_logic.rates import compute_rate
from goldmine_backend.game_logic.state import Inventory, PlayerAccount
from goldmine_backend.shared.value_objects import Checkpoint, PayoutRecord

logger = logging.getLogger(__name__)


def _first(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def normalize_record(
    address: str,
    record: Mapping[str, Any],
    now: int,
    catalog: EquipmentCatalog = DEFAULT_CATALOG,
) -> PlayerAccount:
    """Build an account from a stored record, accepting older layouts.

    Earlier files kept the checkpoint as flat ``last_checkpoint_gold`` /
    ``checkpoint_timestamp`` / ``total_mining_power`` fields, and the oldest ones
    only a bare ``gold`` balance. Land and activity fields may use either
    camelCase or snake_case.
    """
    if "checkpoint" in record and "address" in record:
        return PlayerAccount.model_validate(record)

    inventory = Inventory(counts=record.get("inventory") or {})
    checkpoint_data = record.get("checkpoint")
    if isinstance(checkpoint_data, Mapping):
        checkpoint = Checkpoint.model_validate(checkpoint_data)
    elif record.get("total_mining_power") is not None:
        checkpoint = Checkpoint(
            snapshot_gold=float(record.get("last_checkpoint_gold") or 0),
            snapshot_timestamp=int(record.get("checkpoint_timestamp") or now),
            accrual_rate_per_minute=float(record["total_mining_power"]),
        )
    else:
        checkpoint = Checkpoint(
            snapshot_gold=float(_first(record, "last_checkpoint_gold", "gold") or 0),
            snapshot_timestamp=now,
            accrual_rate_per_minute=compute_rate(inventory, catalog),
        )
    pending = tuple(
        PayoutRecord.model_validate(entry)
        for entry in _first(record, "pendingPayouts", "pending_payouts") or ()
    )
    return PlayerAccount(
        address=address,
        inventory=inventory,
        checkpoint=checkpoint,
        has_land=bool(_first(record, "hasLand", "has_land") or False),
        land_purchase_date=_first(record, "landPurchaseDate", "land_purchase_date"),
        last_activity=int(_first(record, "lastActivity", "last_activity") or now),
        pending_payouts=pending,
    )


class FileUserStore:
    """Keep every account in one JSON document on disk.

    The whole document is held in memory after :meth:`init` and rewritten
    atomically on every :meth:`put_player`.
    """

    def __init__(self, path: str | Path, *, clock: Clock = now_seconds) -> None:
        self._path = Path(path)
        self._clock = clock
        self._accounts: dict[str, PlayerAccount] = {}
        self._write_lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def init(self) -> None:
        """Load the document, starting empty when the file does not exist."""
        self._accounts = await asyncio.to_thread(self._load)
        logger.info("Loaded %d accounts from %s", len(self._accounts), self._path)

    async def close(self) -> None:
        """Nothing to release; every put is already on disk."""

    async def get_player(self, address: str) -> PlayerAccount:
        account = self._accounts.get(address)
        if account is None:
            return PlayerAccount.new(address, self._clock())
        return account

    async def put_player(self, account: PlayerAccount) -> None:
        async with self._write_lock:
            snapshot = dict(self._accounts)
            snapshot[account.address] = account
            await asyncio.to_thread(self._dump, snapshot)
            self._accounts = snapshot

    async def list_addresses(self) -> tuple[str, ...]:
        return tuple(self._accounts)

    def _load(self) -> dict[str, PlayerAccount]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as exc:
            msg = f"failed to read users file {self._path}"
            raise PersistenceError(msg) from exc
        if not isinstance(raw, dict):
            msg = f"users file {self._path} must contain a JSON object"
            raise PersistenceError(msg)
        now = self._clock()
        accounts: dict[str, PlayerAccount] = {}
        for address, record in raw.items():
            try:
                accounts[address] = normalize_record(address, record, now)
            except (PydanticValidationError, TypeError, ValueError) as exc:
                msg = f"corrupt record for {address} in {self._path}"
                raise PersistenceError(msg) from exc
        return accounts

    def _dump(self, accounts: Mapping[str, PlayerAccount]) -> None:
        document = {
            address: account.model_dump(mode="json")
            for address, account in accounts.items()
        }
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(document, handle, indent=2)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            msg = f"failed to write users file {self._path}"
            raise PersistenceError(msg) from exc


__all__ = ["FileUserStore", "normalize_record"]
