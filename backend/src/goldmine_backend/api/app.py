"""Factory for constructing the FastAPI application."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from goldmine_backend.api.routers import payouts_router, purchases_router, status_router
from goldmine_backend.api.services import MiningService
from goldmine_backend.settings import BackendSettings, get_settings


def create_api(
    service: MiningService | None = None,
    *,
    settings: BackendSettings | None = None,
) -> FastAPI:
    """Instantiate and configure the FastAPI application.

    When *service* is omitted one is built from the settings at startup; the
    store it owns is initialised before the first request and closed on
    shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        mining_service = service or MiningService.create_default(settings or get_settings())
        await mining_service.start()
        app.state.mining_service = mining_service
        try:
            yield
        finally:
            await mining_service.close()

    app = FastAPI(title="Goldmine API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(status_router)
    app.include_router(purchases_router)
    app.include_router(payouts_router)
    return app
