"""Bootstrap service: bring the schema up to date, then seed."""

import structlog

from elementstore.application.data.element_data_seeder import ElementDataSeeder
from elementstore.application.data.schema_migrator import SchemaMigratorProtocol

logger = structlog.get_logger(__name__)


class DbMigrationService:
    """Runs schema migration followed by data seeding."""

    def __init__(
        self,
        schema_migrator: SchemaMigratorProtocol,
        data_seeder: ElementDataSeeder,
    ) -> None:
        self.schema_migrator = schema_migrator
        self.data_seeder = data_seeder

    async def migrate(self, tenant: str | None = None) -> int:
        """
        Migrate the schema for a tenant and seed it.

        Args:
            tenant: Tenant to migrate, or None for the host store

        Returns:
            Number of elements seeded
        """
        scope = tenant or "host"

        logger.info("schema_migration_started", scope=scope)
        await self.schema_migrator.migrate(tenant)
        logger.info("schema_migration_completed", scope=scope)

        seeded = await self.data_seeder.seed()
        logger.info("data_seed_completed", scope=scope, seeded=seeded)
        return seeded
