"""Alembic environment configuration for the agent market.

Runs the schema revisions under ``alembic/versions`` against either async
driver (aiosqlite locally, asyncpg in production), or renders them as SQL
in offline mode.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from agent_market.config import settings

# users, agents and agent_ownerships must all be registered on Base.metadata
# before autogenerate compares it with the live schema.
from agent_market.models import *  # noqa: F401, F403
from agent_market.database import Base

# ---------------------------------------------------------------------------
# Config: alembic.ini plus DATABASE_URL from the application settings
# ---------------------------------------------------------------------------
config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# alembic.ini carries no URL; the app and its migrations share one setting
config.set_main_option("sqlalchemy.url", settings.database_url)

target_metadata = Base.metadata


def _use_batch(dialect_name: str) -> bool:
    # SQLite cannot ALTER constraints in place; batch mode rebuilds the table
    return dialect_name == "sqlite"


# ---------------------------------------------------------------------------
# Offline: render the migration SQL for review or a DBA-applied rollout
# ---------------------------------------------------------------------------
def run_migrations_offline() -> None:
    """Emit SQL to stdout without a live connection."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=_use_batch(url.split(":", 1)[0].split("+", 1)[0]),
    )

    with context.begin_transaction():
        context.run_migrations()


# ---------------------------------------------------------------------------
# Online: apply revisions through a throwaway async engine
# ---------------------------------------------------------------------------
def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=_use_batch(connection.dialect.name),
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    # NullPool: migrations are a one-shot process and must not keep connections
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
