"""Service layer for API-specific business logic."""

from goldmine_backend.api.services.mining import (
    AccountView,
    MiningService,
    build_user_store,
)

__all__ = ["AccountView", "MiningService", "build_user_store"]
