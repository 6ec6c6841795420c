"""Translate domain errors into HTTP responses."""

from __future__ import annotations

from fastapi import HTTPException, status

from goldmine_backend.game_logic import (
    AlreadyOwnsError,
    InsufficientFundsError,
    InventoryDesyncError,
    MiningError,
    PersistenceError,
    UnverifiableSignatureError,
    ValidationError,
)

_STATUS_CODES: tuple[tuple[type[MiningError], int], ...] = (
    (InsufficientFundsError, status.HTTP_400_BAD_REQUEST),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AlreadyOwnsError, status.HTTP_409_CONFLICT),
    (InventoryDesyncError, status.HTTP_409_CONFLICT),
    (UnverifiableSignatureError, status.HTTP_502_BAD_GATEWAY),
    (PersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def to_http_exception(exc: MiningError) -> HTTPException:
    """Return an :class:`HTTPException` carrying the reason and resync values."""
    status_code = next(
        (code for error_type, code in _STATUS_CODES if isinstance(exc, error_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    return HTTPException(status_code=status_code, detail={"error": exc.reason, **exc.detail})


__all__ = ["to_http_exception"]
