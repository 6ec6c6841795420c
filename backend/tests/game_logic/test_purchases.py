"""Tests for land and pickaxe purchases."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from goldmine_backend.game_logic import (
    AddressLocks,
    AlreadyOwnsError,
    EconomyConfiguration,
    InMemoryAuditTrail,
    InMemoryUserStore,
    InsufficientFundsError,
    LandRequiredError,
    PurchaseFlow,
    SignatureVerifier,
    UnverifiableSignatureError,
    ValidationError,
    current_gold,
)
from goldmine_backend.game_logic.purchases import parse_quantity
from goldmine_backend.shared import (
    AuditEventType,
    ConfirmationStatus,
    EquipmentKind,
    SignaturePosture,
)

if TYPE_CHECKING:
    from collections.abc import Callable

ADDRESS = "wallet-purchases"
SIGNATURE = "5" * 88


@pytest.fixture
def make_flow(
    store: InMemoryUserStore, chain_client, audit: InMemoryAuditTrail, clock
) -> Callable[..., PurchaseFlow]:
    def factory(**overrides: object) -> PurchaseFlow:
        config = EconomyConfiguration(**overrides)
        verifier = SignatureVerifier(
            chain_client, audit, posture=config.signature_posture
        )
        return PurchaseFlow(
            store=store,
            locks=AddressLocks(),
            verifier=verifier,
            config=config,
            clock=clock,
        )

    return factory


def test_land_is_granted_once(make_flow, store: InMemoryUserStore, clock) -> None:
    flow = make_flow()

    result = asyncio.run(flow.confirm_land_purchase(ADDRESS, SIGNATURE))

    assert result.account.has_land
    assert result.account.land_purchase_date == clock.now
    assert result.status is ConfirmationStatus.CONFIRMED
    with pytest.raises(AlreadyOwnsError):
        asyncio.run(flow.confirm_land_purchase(ADDRESS, SIGNATURE))
    with pytest.raises(AlreadyOwnsError):
        asyncio.run(flow.quote_land(ADDRESS))
    assert asyncio.run(store.get_player(ADDRESS)).land_purchase_date == clock.now


def test_land_quote_uses_configured_cost(make_flow) -> None:
    quote = asyncio.run(make_flow(land_cost_sol=0.02).quote_land(ADDRESS))

    assert quote.cost_sol == pytest.approx(0.02)
    assert quote.cost_lamports == 20_000_000


def test_pickaxes_require_land(make_flow) -> None:
    flow = make_flow()

    with pytest.raises(LandRequiredError, match="Must own land"):
        asyncio.run(flow.quote_purchase(ADDRESS, EquipmentKind.SILVER))
    with pytest.raises(LandRequiredError):
        asyncio.run(flow.confirm_purchase(ADDRESS, EquipmentKind.SILVER, SIGNATURE))


def test_land_gate_can_be_disabled(make_flow) -> None:
    flow = make_flow(land_required_for_equipment=False)

    result = asyncio.run(flow.confirm_purchase(ADDRESS, EquipmentKind.SILVER, SIGNATURE))

    assert result.account.inventory.count(EquipmentKind.SILVER) == 1


def test_quote_clamps_quantity_and_prices_in_lamports(make_flow) -> None:
    flow = make_flow()
    asyncio.run(flow.confirm_land_purchase(ADDRESS, SIGNATURE))

    quote = asyncio.run(flow.quote_purchase(ADDRESS, EquipmentKind.GOLD, 5000))

    assert quote.quantity == 1000
    assert quote.cost_lamports == 1_000_000 * 1000
    assert quote.cost_sol == pytest.approx(1.0)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, 1), ("", 1), (0, 1), (-4, 1), (7, 7), ("12", 12), (10_000, 1000)],
)
def test_parse_quantity_clamps_into_range(value: object, expected: int) -> None:
    assert parse_quantity(value, EconomyConfiguration()) == expected


@pytest.mark.parametrize("value", [True, "many", 1.5j])
def test_parse_quantity_rejects_non_integers(value: object) -> None:
    with pytest.raises(ValidationError):
        parse_quantity(value, EconomyConfiguration())


def test_confirm_purchase_banks_gold_before_new_rate(make_flow, clock) -> None:
    flow = make_flow()
    asyncio.run(flow.confirm_land_purchase(ADDRESS, SIGNATURE))
    asyncio.run(flow.confirm_purchase(ADDRESS, EquipmentKind.SILVER, SIGNATURE))
    clock.advance(600)

    result = asyncio.run(flow.confirm_purchase(ADDRESS, EquipmentKind.GOLD, SIGNATURE, 2))

    checkpoint = result.account.checkpoint
    assert result.gold == pytest.approx(10)
    assert checkpoint.snapshot_gold == pytest.approx(10)
    assert checkpoint.snapshot_timestamp == clock.now
    assert checkpoint.accrual_rate_per_minute == pytest.approx(21)
    assert result.account.inventory.as_dict() == {
        "silver": 1,
        "gold": 2,
        "diamond": 0,
        "netherite": 0,
    }


def test_confirm_purchase_rejects_malformed_signature(make_flow, chain_client) -> None:
    flow = make_flow(land_required_for_equipment=False)

    with pytest.raises(ValidationError, match="invalid signature format"):
        asyncio.run(flow.confirm_purchase(ADDRESS, EquipmentKind.SILVER, "short"))
    assert chain_client.calls == []


def test_permissive_posture_accepts_unverifiable_signatures(
    make_flow, chain_client, audit: InMemoryAuditTrail
) -> None:
    chain_client.error = UnverifiableSignatureError("rpc down")
    flow = make_flow(land_required_for_equipment=False)

    result = asyncio.run(flow.confirm_purchase(ADDRESS, EquipmentKind.SILVER, SIGNATURE))

    assert result.status is ConfirmationStatus.UNVERIFIED
    assert result.account.inventory.count(EquipmentKind.SILVER) == 1
    assert audit.fetch(ADDRESS)[0].event_type is AuditEventType.SIGNATURE_UNVERIFIED


def test_strict_posture_rejects_unknown_signatures(
    make_flow, chain_client, store: InMemoryUserStore
) -> None:
    chain_client.status = ConfirmationStatus.UNKNOWN
    flow = make_flow(
        land_required_for_equipment=False, signature_posture=SignaturePosture.STRICT
    )

    with pytest.raises(ValidationError, match="transaction not found"):
        asyncio.run(flow.confirm_purchase(ADDRESS, EquipmentKind.SILVER, SIGNATURE))
    assert asyncio.run(store.list_addresses()) == ()


def test_strict_posture_propagates_rpc_failures(make_flow, chain_client) -> None:
    chain_client.error = UnverifiableSignatureError("rpc down")
    flow = make_flow(signature_posture=SignaturePosture.STRICT)

    with pytest.raises(UnverifiableSignatureError):
        asyncio.run(flow.confirm_land_purchase(ADDRESS, SIGNATURE))


def test_buy_with_gold_debits_then_adds_rate(make_flow, store, clock) -> None:
    flow = make_flow()
    asyncio.run(flow.confirm_land_purchase(ADDRESS, SIGNATURE))
    asyncio.run(flow.confirm_purchase(ADDRESS, EquipmentKind.DIAMOND, SIGNATURE))
    clock.advance(60)

    result = asyncio.run(flow.buy_with_gold(ADDRESS, EquipmentKind.SILVER, 40))

    assert result.gold == pytest.approx(60)
    assert result.account.checkpoint.accrual_rate_per_minute == pytest.approx(101)
    stored = asyncio.run(store.get_player(ADDRESS))
    assert current_gold(stored.checkpoint, clock.now + 60) == pytest.approx(161)


def test_buy_with_gold_rejects_overspending(make_flow, store) -> None:
    flow = make_flow()
    asyncio.run(flow.confirm_land_purchase(ADDRESS, SIGNATURE))
    before = asyncio.run(store.get_player(ADDRESS))

    with pytest.raises(InsufficientFundsError):
        asyncio.run(flow.buy_with_gold(ADDRESS, EquipmentKind.SILVER, 10))
    assert asyncio.run(store.get_player(ADDRESS)) == before


@pytest.mark.parametrize("cost", [0, -5, float("nan")])
def test_buy_with_gold_rejects_invalid_cost(make_flow, cost: float) -> None:
    with pytest.raises(ValidationError):
        asyncio.run(make_flow().buy_with_gold(ADDRESS, EquipmentKind.SILVER, cost))
