"""SQLAlchemy schemas."""

from goldmine_backend.database.schemas.player import PlayerSchema

__all__ = ["PlayerSchema"]
