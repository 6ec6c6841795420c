"""Dependency providers for FastAPI routers."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from goldmine_backend.api.services import MiningService


def get_mining_service(request: Request) -> MiningService:
    """Return the service created for the running application."""

    return request.app.state.mining_service


def ensure_admin(service: MiningService, token: str | None) -> None:
    """Reject requests whose token does not match the configured admin token."""

    if not service.is_admin(token):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail={"error": "unauthorized"}
        )


__all__ = ["ensure_admin", "get_mining_service"]
