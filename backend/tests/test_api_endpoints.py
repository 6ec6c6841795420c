from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient

from goldmine_backend.api import create_api
from goldmine_backend.api.services import MiningService
from goldmine_backend.game_logic import EconomyConfiguration, UnverifiableSignatureError
from goldmine_backend.shared import ConfirmationStatus, SignaturePosture

if TYPE_CHECKING:
    from collections.abc import Iterator

ADDRESS = "Wallet1111111111111111111111111111111111111"
SIGNATURE = "5" * 88


@pytest.fixture
def client(service: MiningService) -> Iterator[TestClient]:
    with TestClient(create_api(service)) as test_client:
        yield test_client


def buy_land(client: TestClient) -> None:
    response = client.post(
        "/confirm-land-purchase", json={"address": ADDRESS, "signature": SIGNATURE}
    )
    assert response.status_code == 200


def test_status_creates_zeroed_account(client: TestClient, clock) -> None:
    response = client.get("/status", params={"address": ADDRESS})

    assert response.status_code == 200
    body = response.json()
    assert body["address"] == ADDRESS
    assert body["gold"] == 0
    assert body["totalRate"] == 0
    assert body["hasLand"] is False
    assert body["inventory"] == {"silver": 0, "gold": 0, "diamond": 0, "netherite": 0}
    assert body["checkpoint"]["snapshotTimestamp"] == clock.now


def test_status_requires_address(client: TestClient) -> None:
    response = client.get("/status")

    assert response.status_code == 400
    assert response.json()["detail"] == {"error": "address required"}


def test_config_publishes_catalog_and_prices(client: TestClient) -> None:
    response = client.get("/config")

    assert response.status_code == 200
    body = response.json()
    assert set(body["pickaxes"]) == {"silver", "gold", "diamond", "netherite"}
    assert body["minSellGold"] == 5
    assert body["treasury"].startswith("Treasury")


def test_land_purchase_flow(client: TestClient) -> None:
    quote = client.post("/purchase-land", json={"address": ADDRESS})
    assert quote.status_code == 200
    assert quote.json()["costLamports"] == 10_000_000

    buy_land(client)

    status = client.get("/land-status", params={"address": ADDRESS}).json()
    assert status["hasLand"] is True
    assert status["landPurchaseDate"] is not None

    again = client.post(
        "/confirm-land-purchase", json={"address": ADDRESS, "signature": SIGNATURE}
    )
    assert again.status_code == 409
    assert again.json()["detail"]["error"] == "User already owns land"


def test_pickaxe_purchase_requires_land(client: TestClient) -> None:
    response = client.post(
        "/purchase-confirm",
        json={"address": ADDRESS, "pickaxeType": "silver", "signature": SIGNATURE},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "Must own land before buying pickaxes"


def test_purchase_quote_and_confirm(client: TestClient, clock) -> None:
    buy_land(client)

    quote = client.post(
        "/purchase-quote",
        json={"address": ADDRESS, "pickaxeType": "gold", "quantity": 3},
    )
    assert quote.status_code == 200
    assert quote.json()["costLamports"] == 3_000_000

    confirm = client.post(
        "/purchase-confirm",
        json={
            "address": ADDRESS,
            "pickaxeType": "gold",
            "signature": SIGNATURE,
            "quantity": 3,
        },
    )
    assert confirm.status_code == 200
    body = confirm.json()
    assert body["status"] == "confirmed"
    assert body["quantity"] == 3
    assert body["inventory"]["gold"] == 3
    assert body["totalRate"] == pytest.approx(0.5)
    assert body["checkpoint"]["accrualRatePerMinute"] == pytest.approx(30)

    clock.advance(60)
    status = client.get("/status", params={"address": ADDRESS}).json()
    assert status["gold"] == pytest.approx(30)


def test_unknown_pickaxe_is_rejected(client: TestClient) -> None:
    buy_land(client)

    response = client.post(
        "/purchase-quote", json={"address": ADDRESS, "pickaxeType": "obsidian"}
    )

    assert response.status_code == 400
    assert "unknown pickaxe type" in response.json()["detail"]["error"]


def test_unverifiable_signature_in_strict_mode_maps_to_bad_gateway(
    store, gateway, clock
) -> None:
    class DownChainClient:
        async def get_confirmation_status(self, signature: str) -> ConfirmationStatus:
            raise UnverifiableSignatureError("rpc down")

        async def aclose(self) -> None:
            return None

    service = MiningService(
        store=store,
        chain_client=DownChainClient(),
        gateway=gateway,
        config=EconomyConfiguration(signature_posture=SignaturePosture.STRICT),
        clock=clock,
    )
    with TestClient(create_api(service)) as client:
        response = client.post(
            "/confirm-land-purchase", json={"address": ADDRESS, "signature": SIGNATURE}
        )

    assert response.status_code == 502


def test_buy_with_gold_reports_current_gold_when_short(client: TestClient) -> None:
    buy_land(client)

    response = client.post(
        "/buy-with-gold",
        json={"address": ADDRESS, "pickaxeType": "silver", "goldCost": 100},
    )

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["error"].startswith("insufficient gold")
    assert detail["currentGold"] == 0


def test_buy_with_gold_requires_all_fields(client: TestClient) -> None:
    response = client.post("/buy-with-gold", json={"address": ADDRESS})

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == (
        "address, pickaxeType, and goldCost required"
    )


def test_sell_end_to_end(client: TestClient, clock, gateway) -> None:
    buy_land(client)
    client.post(
        "/purchase-confirm",
        json={"address": ADDRESS, "pickaxeType": "silver", "signature": SIGNATURE},
    )
    clock.advance(120)

    status = client.get("/status", params={"address": ADDRESS}).json()
    assert status["gold"] == pytest.approx(2)

    below_floor = client.post("/sell", json={"address": ADDRESS, "amountGold": 1})
    assert below_floor.status_code == 400
    assert below_floor.json()["detail"]["error"] == "minimum sell is 5"

    zero = client.post("/sell", json={"address": ADDRESS, "amountGold": 0})
    assert zero.status_code == 400

    clock.advance(600)
    sold = client.post(
        "/sell",
        json={
            "address": ADDRESS,
            "amountGold": 10,
            "clientGold": 12,
            "clientInventory": {"silver": 1},
        },
    )
    assert sold.status_code == 200
    body = sold.json()
    assert body["mode"] == "immediate"
    assert body["amountGold"] == pytest.approx(10)
    assert body["newGold"] == pytest.approx(2)
    assert body["payoutSol"] == pytest.approx(10 * 0.00001)
    assert gateway.sent[0][0] == ADDRESS


def test_sell_with_desynced_inventory_is_conflict(client: TestClient, clock) -> None:
    buy_land(client)
    client.post(
        "/purchase-confirm",
        json={"address": ADDRESS, "pickaxeType": "silver", "signature": SIGNATURE},
    )
    clock.advance(3600)

    response = client.post(
        "/sell",
        json={"address": ADDRESS, "amountGold": 10, "clientInventory": {"silver": 5}},
    )

    assert response.status_code == 409
    assert response.json()["detail"]["inventory"]["silver"] == 1


def test_admin_price_requires_token(client: TestClient) -> None:
    denied = client.post("/admin/price", json={"token": "wrong", "goldPriceSol": 0.1})
    assert denied.status_code == 401

    invalid = client.post(
        "/admin/price", json={"token": "admin-secret", "goldPriceSol": -1}
    )
    assert invalid.status_code == 400

    accepted = client.post(
        "/admin/price", json={"token": "admin-secret", "goldPriceSol": 0.5}
    )
    assert accepted.status_code == 200
    assert accepted.json() == {"goldPriceSol": 0.5}
    assert client.get("/config").json()["goldPriceSol"] == 0.5


def test_pending_payout_then_drain(client: TestClient, clock, gateway) -> None:
    gateway.fail = True
    buy_land(client)
    client.post(
        "/purchase-confirm",
        json={"address": ADDRESS, "pickaxeType": "gold", "signature": SIGNATURE},
    )
    clock.advance(120)

    sold = client.post("/sell", json={"address": ADDRESS, "amountGold": 10})
    assert sold.status_code == 200
    assert sold.json()["mode"] == "pending"
    assert sold.json()["newGold"] == pytest.approx(10)

    gateway.fail = False
    drained = client.post(
        "/admin/payouts/drain", json={"token": "admin-secret", "address": ADDRESS}
    )
    assert drained.status_code == 200
    assert drained.json() == {"dispatched": 1, "remaining": 0, "pending": []}
