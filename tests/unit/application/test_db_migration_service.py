"""Tests for DbMigrationService and NullSchemaMigrator."""

import pytest

from elementstore.application.data.db_migration_service import DbMigrationService
from elementstore.application.data.element_data_seeder import ElementDataSeeder
from elementstore.application.data.schema_migrator import NullSchemaMigrator


class RecordingMigrator:
    def __init__(self, calls: list[str]) -> None:
        self.calls = calls

    async def migrate(self, tenant: str | None = None) -> None:
        self.calls.append(f"migrate:{tenant}")


class RecordingSeeder:
    def __init__(self, calls: list[str]) -> None:
        self.calls = calls

    async def seed(self) -> int:
        self.calls.append("seed")
        return 4


class FailingMigrator:
    async def migrate(self, tenant: str | None = None) -> None:
        raise RuntimeError("boom")


class TestNullSchemaMigrator:
    @pytest.mark.asyncio
    async def test_migrate_returns_none(self) -> None:
        assert await NullSchemaMigrator().migrate() is None

    @pytest.mark.asyncio
    async def test_migrate_accepts_tenant(self) -> None:
        migrator = NullSchemaMigrator()
        assert await migrator.migrate("acme") is None
        assert await migrator.migrate("acme") is None


class TestDbMigrationService:
    """Test suite for DbMigrationService."""

    @pytest.mark.asyncio
    async def test_migrates_before_seeding(self) -> None:
        calls: list[str] = []
        service = DbMigrationService(RecordingMigrator(calls), RecordingSeeder(calls))

        seeded = await service.migrate("acme")

        assert seeded == 4
        assert calls == ["migrate:acme", "seed"]

    @pytest.mark.asyncio
    async def test_failed_migration_skips_seeding(self) -> None:
        calls: list[str] = []
        service = DbMigrationService(FailingMigrator(), RecordingSeeder(calls))

        with pytest.raises(RuntimeError):
            await service.migrate()
        assert calls == []

    @pytest.mark.asyncio
    async def test_document_bootstrap_is_idempotent(
        self, document_repository, identity_generator
    ) -> None:
        service = DbMigrationService(
            NullSchemaMigrator(), ElementDataSeeder(document_repository, identity_generator)
        )

        assert await service.migrate() == 4
        assert await service.migrate() == 0
        assert await document_repository.get_count() == 4
