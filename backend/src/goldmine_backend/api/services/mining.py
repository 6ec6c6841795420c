"""Mining economy service exposed to the API layer."""

from __future__ import annotations

import hmac
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from goldmine_backend.game_logic import (
    DEFAULT_CATALOG,
    AddressLocks,
    FileUserStore,
    InMemoryAuditTrail,
    InMemoryUserStore,
    PayoutFlow,
    PurchaseFlow,
    SellValidator,
    SignatureVerifier,
    SolanaRpcChainClient,
    UnconfiguredPaymentGateway,
    ValidationError,
    current_gold,
    get_default_economy_configuration,
    now_seconds,
    rate_per_second,
)
from goldmine_backend.shared import StorageBackend

if TYPE_CHECKING:
    from goldmine_backend.game_logic import (
        AuditTrail,
        ChainStatusClient,
        Clock,
        DrainReport,
        EconomyConfiguration,
        EquipmentCatalog,
        LandQuote,
        PaymentGateway,
        PlayerAccount,
        PurchaseQuote,
        PurchaseResult,
        SellOutcome,
        UserStore,
    )
    from goldmine_backend.settings import BackendSettings
    from goldmine_backend.shared import AuditEvent

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class AccountView:
    """Account together with the values derived from it at read time."""

    account: PlayerAccount
    gold: float
    rate_per_second: float


def build_user_store(settings: BackendSettings, *, clock: Clock = now_seconds) -> UserStore:
    """Return the user store selected by ``settings.storage_backend``."""
    if settings.storage_backend is StorageBackend.MEMORY:
        return InMemoryUserStore(clock=clock)
    if settings.storage_backend is StorageBackend.FILE:
        return FileUserStore(settings.users_file, clock=clock)

    from goldmine_backend.database import DatabaseService, SqlUserStore

    return SqlUserStore(DatabaseService(settings.database_url, settings=settings), clock=clock)


class MiningService:
    """Wire the ledger, validator and flows to a store and collaborators."""

    def __init__(
        self,
        *,
        store: UserStore,
        chain_client: ChainStatusClient,
        gateway: PaymentGateway,
        config: EconomyConfiguration | None = None,
        catalog: EquipmentCatalog = DEFAULT_CATALOG,
        audit: AuditTrail | None = None,
        clock: Clock = now_seconds,
        cluster_url: str = "https://api.devnet.solana.com",
        treasury: str | None = None,
        admin_token: str | None = None,
    ) -> None:
        self._store = store
        self._chain_client = chain_client
        self._config = config or get_default_economy_configuration()
        self._catalog = catalog
        self._audit = audit or InMemoryAuditTrail()
        self._clock = clock
        self._cluster_url = cluster_url
        self._treasury = treasury
        self._admin_token = admin_token
        self._locks = AddressLocks()
        verifier = SignatureVerifier(
            chain_client,
            self._audit,
            posture=self._config.signature_posture,
            min_length=self._config.signature_min_length,
            max_length=self._config.signature_max_length,
        )
        self._purchases = PurchaseFlow(
            store=store,
            locks=self._locks,
            verifier=verifier,
            config=self._config,
            catalog=catalog,
            clock=clock,
        )
        self._payouts = PayoutFlow(
            store=store,
            locks=self._locks,
            validator=SellValidator(self._config, self._audit),
            gateway=gateway,
            config=self._config,
            clock=clock,
        )

    @classmethod
    def create_default(cls, settings: BackendSettings) -> MiningService:
        """Return a service configured from *settings*."""
        return cls(
            store=build_user_store(settings),
            chain_client=SolanaRpcChainClient(
                settings.solana_cluster_url, timeout=settings.chain_timeout_seconds
            ),
            gateway=UnconfiguredPaymentGateway(),
            cluster_url=settings.solana_cluster_url,
            treasury=settings.treasury_public_key,
            admin_token=settings.admin_token,
        )

    @property
    def configuration(self) -> EconomyConfiguration:
        return self._config

    async def start(self) -> None:
        """Load or create the backing store."""
        await self._store.init()

    async def close(self) -> None:
        await self._store.close()
        await self._chain_client.aclose()

    def rate_for(self, account: PlayerAccount) -> float:
        """Return the gold per second produced by the pickaxes of *account*."""
        return rate_per_second(account.inventory, self._catalog)

    def _view(self, account: PlayerAccount, now: int) -> AccountView:
        return AccountView(
            account=account,
            gold=current_gold(account.checkpoint, now),
            rate_per_second=rate_per_second(account.inventory, self._catalog),
        )

    @staticmethod
    def _require_address(address: str | None) -> str:
        if not address or not address.strip():
            msg = "address required"
            raise ValidationError(msg)
        return address.strip()

    async def read_status(self, address: str | None) -> AccountView:
        """Return inventory, rate and freshly computed gold for *address*."""
        wallet = self._require_address(address)
        async with self._locks.hold(wallet):
            now = self._clock()
            account = (await self._store.get_player(wallet)).touch(now)
            await self._store.put_player(account)
        return self._view(account, now)

    async def land_status(self, address: str | None) -> PlayerAccount:
        wallet = self._require_address(address)
        return await self._store.get_player(wallet)

    async def buy_with_gold(
        self, address: str | None, pickaxe_type: str | None, gold_cost: float | None
    ) -> PurchaseResult:
        if not address or not pickaxe_type or not gold_cost:
            msg = "address, pickaxeType, and goldCost required"
            raise ValidationError(msg)
        kind = self._catalog.parse_kind(pickaxe_type)
        return await self._purchases.buy_with_gold(self._require_address(address), kind, gold_cost)

    async def quote_purchase(
        self, address: str | None, pickaxe_type: str | None, quantity: object = None
    ) -> PurchaseQuote:
        wallet = self._require_address(address)
        kind = self._catalog.parse_kind(pickaxe_type)
        return await self._purchases.quote_purchase(wallet, kind, quantity)

    async def quote_land(self, address: str | None) -> LandQuote:
        return await self._purchases.quote_land(self._require_address(address))

    async def confirm_purchase(
        self,
        address: str | None,
        pickaxe_type: str | None,
        signature: object,
        quantity: object = None,
    ) -> PurchaseResult:
        if not address or not pickaxe_type or not signature:
            msg = "address, pickaxeType, signature required"
            raise ValidationError(msg)
        kind = self._catalog.parse_kind(pickaxe_type)
        return await self._purchases.confirm_purchase(
            self._require_address(address), kind, signature, quantity
        )

    async def confirm_land_purchase(
        self, address: str | None, signature: object
    ) -> PurchaseResult:
        if not address or not signature:
            msg = "address and signature required"
            raise ValidationError(msg)
        return await self._purchases.confirm_land_purchase(
            self._require_address(address), signature
        )

    async def sell(
        self,
        address: str | None,
        amount_gold: float | None,
        *,
        client_gold: float | None = None,
        client_inventory: Mapping[str, int] | None = None,
    ) -> SellOutcome:
        if not address or amount_gold is None:
            msg = "address and amountGold required"
            raise ValidationError(msg)
        return await self._payouts.sell(
            self._require_address(address),
            amount_gold,
            client_gold=client_gold,
            client_inventory=client_inventory,
        )

    async def drain_pending_payouts(self, address: str | None) -> DrainReport:
        return await self._payouts.drain_pending(self._require_address(address))

    def audit_events(self, address: str) -> tuple[AuditEvent, ...]:
        return self._audit.fetch(address)

    def is_admin(self, token: str | None) -> bool:
        """Return whether *token* matches the configured admin token."""
        if not self._admin_token or not token:
            return False
        return hmac.compare_digest(token, self._admin_token)

    def set_gold_price(self, gold_price_sol: float) -> EconomyConfiguration:
        """Change the SOL paid per gold for subsequent sells."""
        if not math.isfinite(gold_price_sol) or gold_price_sol <= 0:
            msg = "invalid price"
            raise ValidationError(msg)
        self._config = self._config.model_copy(update={"gold_price_sol": gold_price_sol})
        self._purchases.update_configuration(self._config)
        self._payouts.update_configuration(self._config)
        logger.info("Gold price set to %s SOL", gold_price_sol)
        return self._config

    def public_config(self) -> dict[str, Any]:
        """Return the values clients need to render prices and limits."""
        return {
            "pickaxes": self._catalog.as_public_dict(),
            "gold_price_sol": self._config.gold_price_sol,
            "min_sell_gold": self._config.min_sell_gold,
            "land_cost_sol": self._config.land_cost_sol,
            "cluster_url": self._cluster_url,
            "treasury": self._treasury,
        }


__all__ = ["AccountView", "MiningService", "build_user_store"]
