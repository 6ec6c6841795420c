"""Read-only account and configuration endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from goldmine_backend.api.dependencies import get_mining_service
from goldmine_backend.api.errors import to_http_exception
from goldmine_backend.api.models import ConfigResponse, LandStatusResponse, StatusResponse
from goldmine_backend.api.services import MiningService
from goldmine_backend.game_logic import MiningError

router = APIRouter(tags=["status"])


@router.get("/status", response_model=StatusResponse)
async def read_status(
    address: str | None = None,
    service: MiningService = Depends(get_mining_service),
) -> StatusResponse:
    """Return inventory, mining rate and current gold for a wallet."""

    try:
        view = await service.read_status(address)
    except MiningError as exc:
        raise to_http_exception(exc) from exc
    return StatusResponse.from_view(view)


@router.get("/land-status", response_model=LandStatusResponse)
async def land_status(
    address: str | None = None,
    service: MiningService = Depends(get_mining_service),
) -> LandStatusResponse:
    """Return whether a wallet owns land and since when."""

    try:
        account = await service.land_status(address)
    except MiningError as exc:
        raise to_http_exception(exc) from exc
    return LandStatusResponse.from_account(account)


@router.get("/config", response_model=ConfigResponse)
def read_config(service: MiningService = Depends(get_mining_service)) -> ConfigResponse:
    """Publish the catalog, gold price and chain settings."""

    return ConfigResponse.model_validate(service.public_config())


__all__ = ["router"]
