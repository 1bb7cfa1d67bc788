"""Runtime schema migrator for the relational backend."""

import structlog
from alembic import command
from sqlalchemy import text
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.ext.asyncio import AsyncEngine

from elementstore.constants import MIGRATION_LOCK_ID
from elementstore.infrastructure.relational.connection_resolver import ConnectionStringResolver
from elementstore.infrastructure.relational.database import create_engine, is_memory_url
from elementstore.infrastructure.relational.errors import (
    connecting,
    is_disconnect,
    store_unavailable,
)
from elementstore.infrastructure.relational.schema_factory import build_alembic_config

logger = structlog.get_logger(__name__)


class AlembicSchemaMigrator:
    """
    Applies pending Alembic migrations to a tenant's database.

    The URL is resolved and a throwaway engine built on every call, so a
    migrator shared across tenant scopes never reuses another scope's
    connection. Upgrading an up-to-date database is a no-op, and concurrent
    upgrades of one database run one after another.

    A private in-memory SQLite database only exists inside the engine that
    opened it. When the resolved URL names one and matches ``engine``, that
    engine is used (and left open) instead of a throwaway one.
    """

    def __init__(
        self,
        connection_resolver: ConnectionStringResolver,
        echo: bool = False,
        engine: AsyncEngine | None = None,
    ) -> None:
        self.connection_resolver = connection_resolver
        self.echo = echo
        self.engine = engine

    @staticmethod
    def _lock(connection: Connection) -> None:
        """Hold the database-wide migration lock until the transaction ends."""
        dialect = connection.dialect.name
        if dialect == "postgresql":
            connection.execute(
                text("SELECT pg_advisory_xact_lock(:lock_id)"), {"lock_id": MIGRATION_LOCK_ID}
            )
        elif dialect == "sqlite":
            # Takes the write lock now; other writers wait on the busy timeout
            connection.exec_driver_sql("BEGIN IMMEDIATE")

    @classmethod
    def _upgrade(cls, connection: Connection) -> None:
        cls._lock(connection)
        command.upgrade(build_alembic_config(connection=connection), "head")

    def _shared_engine(self, url: str) -> AsyncEngine | None:
        if self.engine is None or not is_memory_url(url):
            return None
        if self.engine.url != make_url(url):
            return None
        return self.engine

    async def _run(self, engine: AsyncEngine) -> None:
        with connecting():
            connection = await engine.connect()
        try:
            async with connection.begin():
                await connection.run_sync(self._upgrade)
        except Exception as e:
            if is_disconnect(e):
                raise store_unavailable(e) from e
            raise
        finally:
            await connection.close()

    async def migrate(self, tenant: str | None = None) -> None:
        """
        Upgrade the tenant's schema to the latest revision.

        Raises:
            StoreUnavailableError: If the database cannot be reached
        """
        url = self.connection_resolver.resolve(tenant)
        shared = self._shared_engine(url)
        if shared is not None:
            await self._run(shared)
        else:
            engine = create_engine(url, echo=self.echo, pooled=False)
            try:
                await self._run(engine)
            finally:
                await engine.dispose()

        logger.info("schema_migrated", tenant=tenant or "host")
