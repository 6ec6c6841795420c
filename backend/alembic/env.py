"""Alembic environment for the players table.

The database URL comes from the backend settings unless one is passed with
``alembic -x url=...``, which is how the JSON-file migration target is primed.
"""

from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from goldmine_backend.database import BaseSchema, PlayerSchema, get_settings  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

database_url = context.get_x_argument(as_dictionary=True).get(
    "url", get_settings().database_url
)
config.set_main_option("sqlalchemy.url", database_url)

target_metadata = BaseSchema.metadata
# SQLite cannot ALTER most constraints in place.
render_as_batch = database_url.startswith("sqlite")


def run_migrations_offline() -> None:
    """Emit the players DDL as SQL without connecting."""

    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=render_as_batch,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply pending revisions against a live connection."""

    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=render_as_batch,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
