"""Protocol for schema migrators, plus the no-op migrator for schema-less stores."""

from typing import Protocol


class SchemaMigratorProtocol(Protocol):
    """Brings a store's schema up to date. Must be idempotent."""

    async def migrate(self, tenant: str | None = None) -> None:
        """
        Apply all pending schema changes.

        Args:
            tenant: Logical tenant whose store should be migrated,
                or None for the host store
        """
        ...


class NullSchemaMigrator:
    """
    Migrator for backends without a schema.

    Document collections are created by the store on first write, so there
    is never anything to apply. migrate() returns immediately and cannot fail.
    """

    async def migrate(self, tenant: str | None = None) -> None:
        return None
