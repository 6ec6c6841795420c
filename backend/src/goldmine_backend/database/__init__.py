"""Database connectivity helpers and the relational user store."""

from goldmine_backend.database.base import BaseSchema
from goldmine_backend.database.migration import MigrationReport, migrate_file_store
from goldmine_backend.database.repositories import PlayerRepository
from goldmine_backend.database.schemas import PlayerSchema
from goldmine_backend.database.service import DatabaseService
from goldmine_backend.database.store import SqlUserStore
from goldmine_backend.settings import BackendSettings, get_settings

__all__ = [
    "BackendSettings",
    "BaseSchema",
    "DatabaseService",
    "MigrationReport",
    "PlayerRepository",
    "PlayerSchema",
    "SqlUserStore",
    "get_settings",
    "migrate_file_store",
]
