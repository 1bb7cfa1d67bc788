from .db_migration_service import DbMigrationService
from .element_data_seeder import ElementDataSeeder
from .schema_migrator import NullSchemaMigrator, SchemaMigratorProtocol

__all__ = [
    "DbMigrationService",
    "ElementDataSeeder",
    "NullSchemaMigrator",
    "SchemaMigratorProtocol",
]
