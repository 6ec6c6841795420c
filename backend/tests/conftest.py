"""Test configuration and fixtures for the backend test suite."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from goldmine_backend.api.services import MiningService
from goldmine_backend.game_logic import (
    EconomyConfiguration,
    InMemoryAuditTrail,
    InMemoryUserStore,
    PayoutDispatchError,
)
from goldmine_backend.settings import get_settings
from goldmine_backend.shared import ConfirmationStatus

if TYPE_CHECKING:
    from collections.abc import Iterator

    from goldmine_backend.game_logic import PlayerAccount

START_TIME = 1_700_000_000
SIGNATURE = "5" * 88


class FakeClock:
    """Manually advanced clock returning whole seconds."""

    def __init__(self, start: int = START_TIME) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


class FakeChainClient:
    """Chain-status client returning a preset status or raising a preset error."""

    def __init__(
        self,
        status: ConfirmationStatus = ConfirmationStatus.CONFIRMED,
        error: Exception | None = None,
    ) -> None:
        self.status = status
        self.error = error
        self.calls: list[str] = []
        self.closed = False

    async def get_confirmation_status(self, signature: str) -> ConfirmationStatus:
        self.calls.append(signature)
        if self.error is not None:
            raise self.error
        return self.status

    async def aclose(self) -> None:
        self.closed = True


class FakeGateway:
    """Payment gateway recording dispatches, optionally failing every one."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.error: Exception | None = None
        self.sent: list[tuple[str, float]] = []

    async def dispatch(self, to_address: str, amount_sol: float) -> str:
        if self.fail:
            msg = "treasury offline"
            raise PayoutDispatchError(msg)
        if self.error is not None:
            raise self.error
        self.sent.append((to_address, amount_sol))
        return f"payout-{len(self.sent)}"


class YieldingUserStore(InMemoryUserStore):
    """In-memory store that gives up the event loop on every read and write."""

    async def get_player(self, address: str) -> PlayerAccount:
        await asyncio.sleep(0)
        return await super().get_player(address)

    async def put_player(self, account: PlayerAccount) -> None:
        await asyncio.sleep(0)
        await super().put_player(account)


@pytest.fixture(autouse=True)
def _mock_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure settings are loaded with predictable values during tests."""
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("ADMIN_TOKEN", "admin-secret")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def chain_client() -> FakeChainClient:
    return FakeChainClient()


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def audit() -> InMemoryAuditTrail:
    return InMemoryAuditTrail()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryUserStore:
    return InMemoryUserStore(clock=clock)


@pytest.fixture
def yielding_store(clock: FakeClock) -> YieldingUserStore:
    return YieldingUserStore(clock=clock)


@pytest.fixture
def economy() -> EconomyConfiguration:
    return EconomyConfiguration(min_sell_gold=5)


@pytest.fixture
def service(
    store: InMemoryUserStore,
    chain_client: FakeChainClient,
    gateway: FakeGateway,
    economy: EconomyConfiguration,
    audit: InMemoryAuditTrail,
    clock: FakeClock,
) -> MiningService:
    return MiningService(
        store=store,
        chain_client=chain_client,
        gateway=gateway,
        config=economy,
        audit=audit,
        clock=clock,
        treasury="Treasury1111111111111111111111111111111111",
        admin_token="admin-secret",
    )
