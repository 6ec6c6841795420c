"""Database schema specific tests."""

from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from sqlalchemy import Table

from goldmine_backend.database.schemas import PlayerSchema


def test_player_schema_is_keyed_by_wallet() -> None:
    table = cast("Table", PlayerSchema.__table__)

    assert [column.name for column in table.primary_key.columns] == ["wallet"]


def test_player_schema_keeps_legacy_checkpoint_columns() -> None:
    table = cast("Table", PlayerSchema.__table__)

    for name in ("last_checkpoint_gold", "checkpoint_timestamp", "total_mining_power"):
        assert not table.c[name].nullable
    assert table.c.land_purchase_date.nullable
