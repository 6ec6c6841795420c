"""Database session management utilities."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from goldmine_backend.database.base import BaseSchema
from goldmine_backend.settings import BackendSettings, get_settings


class DatabaseService:
    """Own the engine and session factory behind the relational user store.

    Sessions are opened from worker threads, so SQLite connections are created
    without the same-thread check.
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        settings: BackendSettings | None = None,
    ) -> None:
        config = settings or get_settings()
        database_url = url or config.database_url
        connect_args: dict[str, Any] = {}
        if database_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self._engine = create_engine(
            database_url, future=True, pool_pre_ping=True, connect_args=connect_args
        )
        self._session_factory = sessionmaker(
            bind=self._engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
            class_=Session,
        )

    @property
    def engine(self) -> Engine:
        """Expose the SQLAlchemy engine."""

        return self._engine

    def create_schema(self) -> None:
        """Create missing tables; revisions under ``alembic/`` stay authoritative."""
        BaseSchema.metadata.create_all(self._engine)

    def dispose(self) -> None:
        self._engine.dispose()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Run one unit of work, committing on success and rolling back on error."""

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
