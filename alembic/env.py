"""Alembic migration environment configuration.

Async SQLAlchemy migrations for the catalog/offers/matches schema.
The database URL comes from DATABASE_URL (or .env) through the app settings,
so migrations and the API always target the same database.
"""

import asyncio
import os
import sys
from logging.config import fileConfig

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

load_dotenv()

from catalog_match.settings import Settings  # noqa: E402
from catalog_match.stores.postgres import Base  # noqa: E402
from catalog_match.models import Match, Offer, Product  # noqa: E402,F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# Fresh (uncached) settings: migrations may run with a different env than the API
_settings = Settings()


def run_migrations_offline() -> None:
    """Emit SQL to the script output without a DB connection."""
    context.configure(
        url=_settings.async_database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    """Run migrations with connection."""
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        # SQLite can't ALTER constraints in place
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run migrations in 'online' mode with async engine."""
    connectable = create_async_engine(
        _settings.async_database_url,
        poolclass=pool.NullPool,
        connect_args=_settings.db_connect_args,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
