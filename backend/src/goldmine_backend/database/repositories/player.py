"""Repository helpers for working with player accounts."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from goldmine_backend.database.schemas import PlayerSchema
from goldmine_backend.game_logic.state import Inventory, PlayerAccount
from goldmine_backend.shared.value_objects import Checkpoint, PayoutRecord


def to_account(row: PlayerSchema) -> PlayerAccount:
    """Convert a stored row into a domain account."""
    return PlayerAccount(
        address=row.wallet,
        inventory=Inventory(counts=row.inventory or {}),
        checkpoint=Checkpoint(
            snapshot_gold=row.last_checkpoint_gold,
            snapshot_timestamp=row.checkpoint_timestamp,
            accrual_rate_per_minute=row.total_mining_power,
        ),
        has_land=row.has_land,
        land_purchase_date=row.land_purchase_date,
        last_activity=row.last_activity,
        pending_payouts=tuple(
            PayoutRecord.model_validate(entry) for entry in row.pending_payouts or ()
        ),
    )


class PlayerRepository:
    """Encapsulates persistence operations for :class:`PlayerSchema`."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, wallet: str) -> PlayerSchema | None:
        """Return the player row for *wallet*."""
        return self._session.get(PlayerSchema, wallet)

    def list_wallets(self) -> list[str]:
        """Return every stored wallet address."""
        stmt = select(PlayerSchema.wallet).order_by(PlayerSchema.wallet)
        return list(self._session.scalars(stmt))

    def upsert(self, account: PlayerAccount) -> PlayerSchema:
        """Insert or fully replace the row for *account*."""
        row = self.get(account.address)
        if row is None:
            row = PlayerSchema(wallet=account.address)
            self._session.add(row)
        row.inventory = account.inventory.as_dict()
        row.last_checkpoint_gold = account.checkpoint.snapshot_gold
        row.checkpoint_timestamp = account.checkpoint.snapshot_timestamp
        row.total_mining_power = account.checkpoint.accrual_rate_per_minute
        row.has_land = account.has_land
        row.land_purchase_date = account.land_purchase_date
        row.last_activity = account.last_activity
        row.pending_payouts = [
            record.model_dump(mode="json") for record in account.pending_payouts
        ]
        self._session.flush()
        return row
