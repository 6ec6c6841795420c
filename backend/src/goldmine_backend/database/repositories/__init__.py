"""Repositories wrapping SQLAlchemy sessions."""

from goldmine_backend.database.repositories.player import PlayerRepository, to_account

__all__ = ["PlayerRepository", "to_account"]
