"""Alembic environment for the relational element store."""

import asyncio

from alembic import context
from sqlalchemy.engine import Connection

from elementstore.infrastructure.relational import models  # noqa: F401
from elementstore.infrastructure.relational.database import Base, create_engine
from elementstore.infrastructure.relational.schema_factory import create_schema_config

config = context.config

target_metadata = Base.metadata


def _database_url() -> str:
    url = config.get_main_option("sqlalchemy.url")
    if url:
        return url
    # Invoked straight from the alembic CLI: read the design-time env file
    resolved = create_schema_config().get_main_option("sqlalchemy.url")
    if not resolved:
        raise RuntimeError("No database URL configured for migrations")
    return resolved


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of connecting."""
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    engine = create_engine(_database_url(), pooled=False)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(do_run_migrations)
    finally:
        await engine.dispose()


def run_migrations_online() -> None:
    """Run against a live database, reusing the caller's connection if given."""
    connection = config.attributes.get("connection")
    if connection is None:
        asyncio.run(run_async_migrations())
    else:
        do_run_migrations(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
