"""Gold accrual, purchase and cash-out logic for the mining game.

Modules in this package are independent from FastAPI and SQLAlchemy so they can
be exercised directly in tests and reused by any transport.
"""

from goldmine_backend.game_logic.anticheat import SellDecision, SellValidator
from goldmine_backend.game_logic.catalog import (
    DEFAULT_CATALOG,
    EquipmentCatalog,
    EquipmentSpec,
)
from goldmine_backend.game_logic.chain import (
    ChainStatusClient,
    SignatureVerifier,
    SolanaRpcChainClient,
)
from goldmine_backend.game_logic.configuration import (
    EconomyConfiguration,
    EconomyDefaults,
    get_default_economy_configuration,
)
from goldmine_backend.game_logic.errors import (
    AlreadyOwnsError,
    InsufficientFundsError,
    InventoryDesyncError,
    LandRequiredError,
    MiningError,
    PayoutDispatchError,
    PersistenceError,
    SuspiciousGoldClaimError,
    UnverifiableSignatureError,
    ValidationError,
)
from goldmine_backend.game_logic.file_store import FileUserStore
from goldmine_backend.game_logic.ledger import (
    Clock,
    current_gold,
    debit_gold,
    now_seconds,
    take_checkpoint,
)
from goldmine_backend.game_logic.locks import AddressLocks
from goldmine_backend.game_logic.payments import (
    PaymentGateway,
    UnconfiguredPaymentGateway,
)
from goldmine_backend.game_logic.payouts import DrainReport, PayoutFlow, SellOutcome
from goldmine_backend.game_logic.persistence import (
    AuditTrail,
    InMemoryAuditTrail,
    InMemoryUserStore,
    UserStore,
)
from goldmine_backend.game_logic.purchases import (
    LandQuote,
    PurchaseFlow,
    PurchaseQuote,
    PurchaseResult,
)
from goldmine_backend.game_logic.rates import compute_rate, rate_per_second
from goldmine_backend.game_logic.state import Inventory, PlayerAccount

__all__ = [
    "DEFAULT_CATALOG",
    "AddressLocks",
    "AlreadyOwnsError",
    "AuditTrail",
    "ChainStatusClient",
    "Clock",
    "DrainReport",
    "EconomyConfiguration",
    "EconomyDefaults",
    "EquipmentCatalog",
    "EquipmentSpec",
    "FileUserStore",
    "InMemoryAuditTrail",
    "InMemoryUserStore",
    "InsufficientFundsError",
    "Inventory",
    "InventoryDesyncError",
    "LandQuote",
    "LandRequiredError",
    "MiningError",
    "PaymentGateway",
    "PayoutDispatchError",
    "PayoutFlow",
    "PersistenceError",
    "PlayerAccount",
    "PurchaseFlow",
    "PurchaseQuote",
    "PurchaseResult",
    "SellDecision",
    "SellOutcome",
    "SellValidator",
    "SignatureVerifier",
    "SolanaRpcChainClient",
    "SuspiciousGoldClaimError",
    "UnconfiguredPaymentGateway",
    "UnverifiableSignatureError",
    "UserStore",
    "ValidationError",
    "compute_rate",
    "current_gold",
    "debit_gold",
    "get_default_economy_configuration",
    "now_seconds",
    "rate_per_second",
    "take_checkpoint",
]
