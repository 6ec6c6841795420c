"""Route definitions for public HTTP endpoints."""

from goldmine_backend.api.routers.payouts import router as payouts_router
from goldmine_backend.api.routers.purchases import router as purchases_router
from goldmine_backend.api.routers.status import router as status_router

__all__ = ["payouts_router", "purchases_router", "status_router"]
