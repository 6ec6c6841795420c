"""Models used for API request and response payloads."""

from goldmine_backend.api.models.payout import (
    AdminPriceRequest,
    AdminPriceResponse,
    DrainPayoutsRequest,
    DrainPayoutsResponse,
    PayoutRecordResponse,
    SellRequest,
    SellResponse,
)
from goldmine_backend.api.models.purchase import (
    BuyWithGoldRequest,
    BuyWithGoldResponse,
    LandConfirmRequest,
    LandConfirmResponse,
    LandQuoteRequest,
    LandQuoteResponse,
    PurchaseConfirmRequest,
    PurchaseConfirmResponse,
    PurchaseQuoteRequest,
    PurchaseQuoteResponse,
)
from goldmine_backend.api.models.status import (
    CheckpointResponse,
    ConfigResponse,
    LandStatusResponse,
    StatusResponse,
)

__all__ = [
    "AdminPriceRequest",
    "AdminPriceResponse",
    "BuyWithGoldRequest",
    "BuyWithGoldResponse",
    "CheckpointResponse",
    "ConfigResponse",
    "DrainPayoutsRequest",
    "DrainPayoutsResponse",
    "LandConfirmRequest",
    "LandConfirmResponse",
    "LandQuoteRequest",
    "LandQuoteResponse",
    "PayoutRecordResponse",
    "PurchaseConfirmRequest",
    "PurchaseConfirmResponse",
    "PurchaseQuoteRequest",
    "PurchaseQuoteResponse",
    "SellRequest",
    "SellResponse",
    "StatusResponse",
]
