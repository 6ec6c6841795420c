"""Land and pickaxe purchase endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from goldmine_backend.api.dependencies import get_mining_service
from goldmine_backend.api.errors import to_http_exception
from goldmine_backend.api.models import (
    BuyWithGoldRequest,
    BuyWithGoldResponse,
    CheckpointResponse,
    LandConfirmRequest,
    LandConfirmResponse,
    LandQuoteRequest,
    LandQuoteResponse,
    PurchaseConfirmRequest,
    PurchaseConfirmResponse,
    PurchaseQuoteRequest,
    PurchaseQuoteResponse,
)
from goldmine_backend.api.services import MiningService
from goldmine_backend.game_logic import MiningError
from goldmine_backend.shared import ConfirmationStatus

router = APIRouter(tags=["purchases"])


@router.post("/buy-with-gold", response_model=BuyWithGoldResponse)
async def buy_with_gold(
    payload: BuyWithGoldRequest,
    service: MiningService = Depends(get_mining_service),
) -> BuyWithGoldResponse:
    """Spend accrued gold on one pickaxe."""

    try:
        result = await service.buy_with_gold(
            payload.address, payload.pickaxe_type, payload.gold_cost
        )
    except MiningError as exc:
        raise to_http_exception(exc) from exc

    account = result.account
    return BuyWithGoldResponse(
        new_gold=result.gold,
        inventory=account.inventory.as_dict(),
        checkpoint=CheckpointResponse.from_checkpoint(account.checkpoint),
        message=(
            f"Successfully bought {payload.pickaxe_type} pickaxe "
            f"for {payload.gold_cost} gold!"
        ),
    )


@router.post("/purchase-quote", response_model=PurchaseQuoteResponse)
async def purchase_quote(
    payload: PurchaseQuoteRequest,
    service: MiningService = Depends(get_mining_service),
) -> PurchaseQuoteResponse:
    """Return the SOL amount a wallet must send for a pickaxe order."""

    try:
        quote = await service.quote_purchase(
            payload.address, payload.pickaxe_type, payload.quantity
        )
    except MiningError as exc:
        raise to_http_exception(exc) from exc
    return PurchaseQuoteResponse(
        pickaxe_type=quote.kind.value,
        quantity=quote.quantity,
        cost_sol=quote.cost_sol,
        cost_lamports=quote.cost_lamports,
        treasury=service.public_config()["treasury"],
    )


@router.post("/purchase-land", response_model=LandQuoteResponse)
async def purchase_land(
    payload: LandQuoteRequest,
    service: MiningService = Depends(get_mining_service),
) -> LandQuoteResponse:
    """Return the SOL amount a wallet must send for land."""

    try:
        quote = await service.quote_land(payload.address)
    except MiningError as exc:
        raise to_http_exception(exc) from exc
    return LandQuoteResponse(
        land_cost_sol=quote.cost_sol,
        cost_lamports=quote.cost_lamports,
        treasury=service.public_config()["treasury"],
    )


@router.post("/purchase-confirm", response_model=PurchaseConfirmResponse)
async def purchase_confirm(
    payload: PurchaseConfirmRequest,
    service: MiningService = Depends(get_mining_service),
) -> PurchaseConfirmResponse:
    """Grant pickaxes once their payment signature has been checked."""

    try:
        result = await service.confirm_purchase(
            payload.address, payload.pickaxe_type, payload.signature, payload.quantity
        )
    except MiningError as exc:
        raise to_http_exception(exc) from exc

    account = result.account
    status = result.status or ConfirmationStatus.UNKNOWN
    return PurchaseConfirmResponse(
        status=status.value,
        pickaxe_type=str(payload.pickaxe_type),
        quantity=result.quantity,
        inventory=account.inventory.as_dict(),
        total_rate=service.rate_for(account),
        gold=result.gold,
        checkpoint=CheckpointResponse.from_checkpoint(account.checkpoint),
    )


@router.post("/confirm-land-purchase", response_model=LandConfirmResponse)
async def confirm_land_purchase(
    payload: LandConfirmRequest,
    service: MiningService = Depends(get_mining_service),
) -> LandConfirmResponse:
    """Grant land once its payment signature has been checked."""

    try:
        result = await service.confirm_land_purchase(payload.address, payload.signature)
    except MiningError as exc:
        raise to_http_exception(exc) from exc

    status = result.status or ConfirmationStatus.UNKNOWN
    return LandConfirmResponse(
        status=status.value,
        has_land=result.account.has_land,
        inventory=result.account.inventory.as_dict(),
        message="Land purchased successfully! You can now buy pickaxes and start mining.",
    )


__all__ = ["router"]
