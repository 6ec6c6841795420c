"""Copy accounts from the JSON users file into another store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from goldmine_backend.game_logic.errors import PersistenceError

if TYPE_CHECKING:
    from goldmine_backend.game_logic.file_store import FileUserStore
    from goldmine_backend.game_logic.persistence import UserStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MigrationReport:
    """Counts produced by :func:`migrate_file_store`."""

    migrated: int = 0
    skipped: int = 0
    errors: int = 0
    failed_addresses: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.migrated + self.skipped + self.errors


async def migrate_file_store(source: FileUserStore, target: UserStore) -> MigrationReport:
    """Copy every account from *source* that *target* does not hold yet.

    Existing accounts in *target* are never overwritten. A failure on one
    account is counted and the migration moves on to the next.
    """
    report = MigrationReport()
    existing = set(await target.list_addresses())
    for address in await source.list_addresses():
        if address in existing:
            logger.info("Account %s... already exists in target, skipping", address[:8])
            report.skipped += 1
            continue
        try:
            account = await source.get_player(address)
            await target.put_player(account)
        except PersistenceError as exc:
            logger.error("Error migrating %s...: %s", address[:8], exc.reason)
            report.errors += 1
            report.failed_addresses.append(address)
            continue
        logger.info(
            "Migrated %s... gold=%.2f pickaxes=%d",
            address[:8],
            account.checkpoint.snapshot_gold,
            sum(account.inventory.as_dict().values()),
        )
        report.migrated += 1
    return report


__all__ = ["MigrationReport", "migrate_file_store"]
