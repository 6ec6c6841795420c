"""Sell and payout administration endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from goldmine_backend.api.dependencies import ensure_admin, get_mining_service
from goldmine_backend.api.errors import to_http_exception
from goldmine_backend.api.models import (
    AdminPriceRequest,
    AdminPriceResponse,
    DrainPayoutsRequest,
    DrainPayoutsResponse,
    PayoutRecordResponse,
    SellRequest,
    SellResponse,
)
from goldmine_backend.api.services import MiningService
from goldmine_backend.game_logic import MiningError, ValidationError

router = APIRouter(tags=["payouts"])


@router.post("/sell", response_model=SellResponse)
async def sell(
    payload: SellRequest,
    service: MiningService = Depends(get_mining_service),
) -> SellResponse:
    """Sell gold for SOL, paying out immediately or recording a pending payout."""

    try:
        outcome = await service.sell(
            payload.address,
            payload.amount_gold,
            client_gold=payload.client_gold,
            client_inventory=payload.client_inventory,
        )
    except MiningError as exc:
        raise to_http_exception(exc) from exc
    return SellResponse(
        payout_sol=outcome.payout_sol,
        amount_gold=outcome.decision.allowed,
        new_gold=outcome.new_gold,
        mode=outcome.mode.value,
        signature=outcome.signature,
        note=outcome.note,
    )


@router.post("/admin/price", response_model=AdminPriceResponse)
def set_price(
    payload: AdminPriceRequest,
    service: MiningService = Depends(get_mining_service),
) -> AdminPriceResponse:
    """Change the SOL paid per gold."""

    ensure_admin(service, payload.token)
    try:
        if payload.gold_price_sol is None:
            msg = "invalid price"
            raise ValidationError(msg)
        config = service.set_gold_price(payload.gold_price_sol)
    except MiningError as exc:
        raise to_http_exception(exc) from exc
    return AdminPriceResponse(gold_price_sol=config.gold_price_sol)


@router.post("/admin/payouts/drain", response_model=DrainPayoutsResponse)
async def drain_payouts(
    payload: DrainPayoutsRequest,
    service: MiningService = Depends(get_mining_service),
) -> DrainPayoutsResponse:
    """Retry the pending payouts recorded for one wallet."""

    ensure_admin(service, payload.token)
    try:
        report = await service.drain_pending_payouts(payload.address)
    except MiningError as exc:
        raise to_http_exception(exc) from exc
    return DrainPayoutsResponse(
        dispatched=len(report.dispatched),
        remaining=len(report.remaining),
        pending=[
            PayoutRecordResponse.model_validate(record.model_dump())
            for record in report.remaining
        ],
    )


__all__ = ["router"]
