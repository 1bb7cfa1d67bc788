"""Tests for AlembicSchemaMigrator against file-backed SQLite databases."""

import asyncio
from pathlib import Path

import pytest
from sqlalchemy import inspect, text

from elementstore.exceptions import StoreUnavailableError
from elementstore.infrastructure.relational.connection_resolver import ConnectionStringResolver
from elementstore.infrastructure.relational.database import create_engine
from elementstore.infrastructure.relational.schema_migrator import AlembicSchemaMigrator


def _sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


async def _schema_state(url: str) -> tuple[set[str], str | None]:
    engine = create_engine(url)
    try:
        async with engine.connect() as connection:
            tables = set(await connection.run_sync(lambda c: inspect(c).get_table_names()))
            version = None
            if "alembic_version" in tables:
                result = await connection.execute(text("SELECT version_num FROM alembic_version"))
                version = result.scalar_one()
    finally:
        await engine.dispose()
    return tables, version


class TestAlembicSchemaMigrator:
    """Test suite for AlembicSchemaMigrator."""

    @pytest.mark.asyncio
    async def test_migrate_creates_tables(self, tmp_path: Path) -> None:
        url = _sqlite_url(tmp_path / "host.db")

        await AlembicSchemaMigrator(ConnectionStringResolver(url)).migrate()

        tables, version = await _schema_state(url)
        assert {"app_elements", "app_sub_elements", "alembic_version"} <= tables
        assert version == "001"

    @pytest.mark.asyncio
    async def test_migrate_is_idempotent(self, tmp_path: Path) -> None:
        url = _sqlite_url(tmp_path / "host.db")
        migrator = AlembicSchemaMigrator(ConnectionStringResolver(url))

        await migrator.migrate()
        await migrator.migrate()

        tables, version = await _schema_state(url)
        assert "app_elements" in tables
        assert version == "001"

    @pytest.mark.asyncio
    async def test_migrate_tenant_database(self, tmp_path: Path) -> None:
        host_url = _sqlite_url(tmp_path / "host.db")
        tenant_url = _sqlite_url(tmp_path / "acme.db")
        migrator = AlembicSchemaMigrator(ConnectionStringResolver(host_url, {"acme": tenant_url}))

        await migrator.migrate("acme")

        tenant_tables, _ = await _schema_state(tenant_url)
        host_tables, _ = await _schema_state(host_url)
        assert "app_elements" in tenant_tables
        assert "app_elements" not in host_tables

    @pytest.mark.asyncio
    async def test_unknown_tenant_uses_host_database(self, tmp_path: Path) -> None:
        host_url = _sqlite_url(tmp_path / "host.db")
        migrator = AlembicSchemaMigrator(ConnectionStringResolver(host_url))

        await migrator.migrate("unknown")

        host_tables, _ = await _schema_state(host_url)
        assert "app_elements" in host_tables

    @pytest.mark.asyncio
    async def test_unreachable_database_raises(self, tmp_path: Path) -> None:
        url = _sqlite_url(tmp_path / "missing" / "dir" / "host.db")

        with pytest.raises(StoreUnavailableError) as exc_info:
            await AlembicSchemaMigrator(ConnectionStringResolver(url)).migrate()
        assert exc_info.value.backend == "relational"

    @pytest.mark.asyncio
    async def test_concurrent_migrations_all_succeed(self, tmp_path: Path) -> None:
        url = _sqlite_url(tmp_path / "host.db")
        migrators = [AlembicSchemaMigrator(ConnectionStringResolver(url)) for _ in range(6)]

        await asyncio.gather(*(migrator.migrate() for migrator in migrators))

        tables, version = await _schema_state(url)
        assert {"app_elements", "app_sub_elements"} <= tables
        assert version == "001"

    @pytest.mark.asyncio
    async def test_in_memory_database_uses_given_engine(self) -> None:
        url = "sqlite+aiosqlite://"
        engine = create_engine(url)
        try:
            await AlembicSchemaMigrator(ConnectionStringResolver(url), engine=engine).migrate()

            async with engine.connect() as connection:
                tables = set(await connection.run_sync(lambda c: inspect(c).get_table_names()))
        finally:
            await engine.dispose()
        assert {"app_elements", "app_sub_elements", "alembic_version"} <= tables
