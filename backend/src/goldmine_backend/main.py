"""Goldmine API entrypoint."""

from __future__ import annotations

import asyncio
import logging

import uvicorn

from goldmine_backend.api import create_api
from goldmine_backend.settings import get_settings

logger = logging.getLogger(__name__)


def configure_logging(level: str | int = logging.INFO) -> None:
    """Send log records to stderr with a uniform format."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


app = create_api()


def _run_uvicorn(*, reload: bool) -> None:
    """Start uvicorn with a consistent configuration."""
    config = get_settings()
    configure_logging(config.log_level.upper())
    uvicorn.run(
        "goldmine_backend.main:app",
        host=config.api_host,
        port=config.api_port,
        reload=reload,
    )


def run_dev() -> None:
    """Run the development ASGI server with auto-reload."""
    _run_uvicorn(reload=True)


def run_prod() -> None:
    """Run the production ASGI server without auto-reload."""
    _run_uvicorn(reload=False)


async def _migrate() -> int:
    from goldmine_backend.database import DatabaseService, SqlUserStore, migrate_file_store
    from goldmine_backend.game_logic import FileUserStore

    config = get_settings()
    source = FileUserStore(config.users_file)
    target = SqlUserStore(DatabaseService(config.database_url, settings=config))
    await source.init()
    await target.init()
    try:
        report = await migrate_file_store(source, target)
    finally:
        await target.close()
    logger.info(
        "Migration summary: migrated=%d skipped=%d errors=%d total=%d",
        report.migrated,
        report.skipped,
        report.errors,
        report.total,
    )
    return 1 if report.errors else 0


def run_migrate() -> None:
    """Copy accounts from the JSON users file into the configured database."""
    configure_logging(get_settings().log_level.upper())
    raise SystemExit(asyncio.run(_migrate()))
