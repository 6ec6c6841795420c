"""Tests for checkpoint accrual and debits."""

import pytest

from goldmine_backend.game_logic import (
    InsufficientFundsError,
    Inventory,
    PlayerAccount,
    ValidationError,
    current_gold,
    debit_gold,
    take_checkpoint,
)
from goldmine_backend.shared import Checkpoint, EquipmentKind

START = 1_700_000_000


def make_account(
    *, gold: float = 0.0, rate: float = 0.0, timestamp: int = START, **inventory: int
) -> PlayerAccount:
    """Build an account with a hand-written checkpoint."""

    return PlayerAccount(
        address="wallet-ledger",
        inventory=Inventory(counts=inventory),
        checkpoint=Checkpoint(
            snapshot_gold=gold,
            snapshot_timestamp=timestamp,
            accrual_rate_per_minute=rate,
        ),
        last_activity=timestamp,
    )


def test_gold_accrues_linearly_from_checkpoint() -> None:
    checkpoint = Checkpoint(
        snapshot_gold=100, snapshot_timestamp=START, accrual_rate_per_minute=60
    )

    assert current_gold(checkpoint, START) == pytest.approx(100)
    assert current_gold(checkpoint, START + 30) == pytest.approx(130)
    assert current_gold(checkpoint, START + 120) == pytest.approx(220)


def test_gold_never_decreases_without_a_debit() -> None:
    checkpoint = Checkpoint(
        snapshot_gold=5, snapshot_timestamp=START, accrual_rate_per_minute=11
    )
    samples = [current_gold(checkpoint, START + offset) for offset in range(0, 600, 37)]

    assert samples == sorted(samples)


def test_clock_behind_checkpoint_accrues_nothing() -> None:
    checkpoint = Checkpoint(
        snapshot_gold=42, snapshot_timestamp=START, accrual_rate_per_minute=600
    )

    assert current_gold(checkpoint, START - 500) == pytest.approx(42)


def test_checkpoint_banks_gold_and_adopts_inventory_rate() -> None:
    account = make_account(rate=1.0, silver=1)

    updated, gold = take_checkpoint(account, START + 120)

    assert gold == pytest.approx(2)
    assert updated.checkpoint.snapshot_gold == pytest.approx(2)
    assert updated.checkpoint.snapshot_timestamp == START + 120
    assert updated.checkpoint.accrual_rate_per_minute == pytest.approx(1)


def test_checkpoints_around_purchase_preserve_balance() -> None:
    account = make_account(rate=1.0, silver=1)
    now = START + 600

    before, gold_before = take_checkpoint(account, now)
    grown = before.model_copy(
        update={"inventory": before.inventory.add(EquipmentKind.GOLD, 1)}
    )
    after, gold_after = take_checkpoint(grown, now)

    assert gold_after == pytest.approx(gold_before)
    assert after.checkpoint.accrual_rate_per_minute == pytest.approx(11)
    assert current_gold(after.checkpoint, now + 60) == pytest.approx(gold_before + 11)


def test_checkpoint_timestamp_never_moves_backwards() -> None:
    account = make_account(gold=10, rate=0.0)

    updated, gold = take_checkpoint(account, START - 100)

    assert gold == pytest.approx(10)
    assert updated.checkpoint.snapshot_timestamp == START


def test_debit_keeps_rate_and_reduces_balance() -> None:
    account = make_account(gold=50, rate=11.0, silver=1)

    updated, remaining = debit_gold(account, 20, START + 60)

    assert remaining == pytest.approx(41)
    assert updated.checkpoint.snapshot_gold == pytest.approx(41)
    assert updated.checkpoint.accrual_rate_per_minute == pytest.approx(11)


def test_debit_beyond_balance_is_rejected() -> None:
    account = make_account(gold=10)

    with pytest.raises(InsufficientFundsError) as exc_info:
        debit_gold(account, 10.5, START)

    assert exc_info.value.detail == {"currentGold": 10}


def test_debit_rejects_negative_amounts() -> None:
    with pytest.raises(ValidationError):
        debit_gold(make_account(gold=10), -1, START)
